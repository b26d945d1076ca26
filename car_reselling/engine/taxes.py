"""Sale tax calculation.

Pure functions over ``Decimal``; rates come from ``TaxRates``.

Usage:
    from decimal import Decimal
    from car_reselling.config import TaxRates
    from car_reselling.engine.taxes import TaxCalculator

    calculator = TaxCalculator(TaxRates())
    breakdown = calculator.calculate_taxes(Decimal("15000.00"), Decimal("5000.00"))
    print(breakdown.total_taxes)  # 656.50
"""

from decimal import ROUND_HALF_UP, Decimal

from car_reselling.config import TaxRates
from car_reselling.models.report import TaxBreakdown

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Quantize to cents, rounding half up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def taxable_margin(selling_price: Decimal, purchase_price: Decimal) -> Decimal:
    """Selling price minus purchase price, floored at zero."""
    margin = selling_price - purchase_price
    return margin if margin > 0 else Decimal("0")


class TaxCalculator:
    """Decompose the taxes due on a vehicle sale."""

    def __init__(self, rates: TaxRates | None = None) -> None:
        self.rates = rates or TaxRates()

    def calculate_taxes(
        self,
        selling_price: Decimal | None,
        taxable_margin: Decimal | None,
    ) -> TaxBreakdown:
        """Compute the five tax components and their total.

        Parameters
        ----------
        selling_price : Decimal | None
            Gross sale value; base of the consumption tax.
        taxable_margin : Decimal | None
            Margin already floored at zero by the caller; base of the
            other four components.

        Returns
        -------
        TaxBreakdown
            Components rounded to cents individually, total is the sum of
            the rounded components. All zero when an input is missing.
        """
        if selling_price is None or taxable_margin is None:
            return TaxBreakdown()

        rates = self.rates
        icms = round_money(selling_price * rates.icms_base_rate * rates.icms_rate)
        pis = round_money(taxable_margin * rates.pis_rate)
        cofins = round_money(taxable_margin * rates.cofins_rate)
        csll = round_money(taxable_margin * rates.csll_rate)
        irpj = round_money(taxable_margin * rates.irpj_rate)

        # Round each component before summing; the order matters for cents
        total = round_money(icms + pis + cofins + csll + irpj)

        return TaxBreakdown(
            icms=icms,
            pis=pis,
            cofins=cofins,
            csll=csll,
            irpj=irpj,
            total_taxes=total,
        )

    def calculate_commission_income_tax(self, purchase_commission: Decimal | None) -> Decimal:
        """Income tax withheld over the purchase commission, in cents."""
        if purchase_commission is None:
            return round_money(Decimal("0"))
        return round_money(purchase_commission * self.rates.commission_tax_rate)
