"""SAC (constant amortization) financing estimate."""

from typing import Optional
from pydantic import BaseModel

from src.showcase.links import whatsapp_link
from src.utils.config import ShowcaseConfig
from src.utils.formatting import format_brl

# Installment should not exceed 30% of household income
AFFORDABILITY_RATIO = 0.30
DEFAULT_DOWN_PAYMENT_RATIO = 0.20


class SacQuote(BaseModel):
    principal: float
    down_payment: float
    term_years: int
    annual_rate_percent: float
    financed_amount: float
    monthly_amortization: float
    first_installment: float
    suggested_household_income: float

    @property
    def first_installment_label(self) -> str:
        return format_brl(self.first_installment)

    @property
    def suggested_income_label(self) -> str:
        return format_brl(self.suggested_household_income)


def calculate_sac(
    principal: Optional[float],
    down_payment: Optional[float],
    term_years: Optional[int],
    annual_rate_percent: Optional[float],
) -> Optional[SacQuote]:
    """First SAC installment, or None when price or term is missing."""
    if not principal or principal <= 0 or not term_years:
        return None

    down_payment = down_payment or 0
    annual_rate_percent = annual_rate_percent or 0
    financed = principal - down_payment
    amortization = financed / (term_years * 12)
    first_installment = amortization + financed * (annual_rate_percent / 100 / 12)

    return SacQuote(
        principal=principal,
        down_payment=down_payment,
        term_years=term_years,
        annual_rate_percent=annual_rate_percent,
        financed_amount=financed,
        monthly_amortization=amortization,
        first_installment=first_installment,
        suggested_household_income=first_installment / AFFORDABILITY_RATIO,
    )


def approval_message(agent_name: str, principal: float) -> str:
    return f"Hello {agent_name}, I would like to get credit approved for the property of {format_brl(principal)}."


class LoanCalculatorPanel:
    """Calculator modal state: inputs, and the last result shown."""

    def __init__(self, agent_name: str, whatsapp_number: str):
        self.agent_name = agent_name
        self.whatsapp_number = whatsapp_number
        self.visible = False
        self.principal: Optional[float] = None
        self.down_payment: Optional[float] = None
        self.term_years: int = ShowcaseConfig.TERM_OPTIONS_YEARS[0]
        self.annual_rate_percent: float = ShowcaseConfig.DEFAULT_RATE_PERCENT
        self.result: Optional[SacQuote] = None
        self.approval_url: Optional[str] = None

    def open(self, price: Optional[float]) -> None:
        """Show the modal, pre-filling price and a 20% down payment."""
        if price and price > 0:
            self.principal = price
            self.down_payment = price * DEFAULT_DOWN_PAYMENT_RATIO
        self.visible = True

    def close(self) -> None:
        self.visible = False
        self.result = None
        self.approval_url = None

    def calculate(
        self,
        down_payment: Optional[float] = None,
        term_years: Optional[int] = None,
        annual_rate_percent: Optional[float] = None,
    ) -> Optional[SacQuote]:
        """Recompute; invalid input leaves the previous result untouched."""
        if down_payment is not None:
            self.down_payment = down_payment
        if term_years is not None:
            self.term_years = term_years
        if annual_rate_percent is not None:
            self.annual_rate_percent = annual_rate_percent

        quote = calculate_sac(self.principal, self.down_payment, self.term_years, self.annual_rate_percent)
        if quote is None:
            return self.result

        self.result = quote
        self.approval_url = whatsapp_link(
            self.whatsapp_number, approval_message(self.agent_name, quote.principal)
        )
        return quote
