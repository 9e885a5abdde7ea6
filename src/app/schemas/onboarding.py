from pydantic import BaseModel, Field, field_validator


class CompanyCreate(BaseModel):
    """New company submitted from the onboarding wizard.

    Blank strings become None so optional columns are stored as NULL.
    Length limits mirror the `orgs` columns.
    """

    company_name: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)
    address: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    emergency_phone: str | None = Field(default=None, max_length=50)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
