"""
Schemas Pydantic per le Impostazioni Azienda
Progetto: QuoteBill (Gestionale Preventivi e Fatture)
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanySettingsBase(BaseModel):
    """Campi delle impostazioni azienda."""

    company_name: str = Field("", max_length=255, serialization_alias="companyName")
    company_address: str = Field("", serialization_alias="companyAddress")
    company_phone: str = Field("", max_length=50, serialization_alias="companyPhone")
    company_email: str = Field("", max_length=255, serialization_alias="companyEmail")
    company_website: str = Field("", max_length=255, serialization_alias="companyWebsite")
    logo_url: str = Field("", serialization_alias="logoUrl")
    signature_url: str = Field("", serialization_alias="signatureUrl")
    default_terms: str = Field("", serialization_alias="defaultTerms")
    default_notes: str = Field("", serialization_alias="defaultNotes")
    tax_number: str = Field("", max_length=100, serialization_alias="taxNumber")
    bank_details: str = Field("", serialization_alias="bankDetails")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("company_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Email salvata senza spazi e in minuscolo."""
        return v.strip().lower()


class CompanySettingsUpdate(CompanySettingsBase):
    """Schema per il salvataggio (insert o update) delle impostazioni."""
    pass


class CompanySettingsRead(CompanySettingsBase):
    """Impostazioni lette: id None quando sono i valori predefiniti."""

    id: Optional[uuid.UUID] = Field(None, description="UUID delle impostazioni salvate")
    user_id: Optional[uuid.UUID] = Field(None, serialization_alias="userId")
