"""
Request schemas shared by several API routers.
"""

from pydantic import BaseModel, ConfigDict, Field

from roi_calculator.calculations.roi import ASSUMPTION_RANGES, Assumptions


def _bounds(name: str) -> dict:
    low, high, _step = ASSUMPTION_RANGES[name]
    return {"default": low, "ge": low, "le": high}


class AssumptionsInput(BaseModel):
    """Calculator assumptions, bounded by the slider ranges."""

    employees: int = Field(**_bounds("employees"))
    salary: float = Field(**_bounds("salary"))
    training_hours: int = Field(**_bounds("training_hours"))
    turnover: float = Field(**_bounds("turnover"))
    replace_cost: float = Field(**_bounds("replace_cost"))
    term: int = Field(**_bounds("term"))

    def to_assumptions(self) -> Assumptions:
        return Assumptions(**self.model_dump())


class LeadInput(BaseModel):
    """Lead-capture form fields. Accepts the form's hyphenated names."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="first-name", max_length=100)
    last_name: str = Field("", alias="last-name", max_length=100)
    business_email: str = Field("", alias="business-email", max_length=255)
    company: str = Field("", max_length=255)
    telephone: str = Field("", max_length=50)
