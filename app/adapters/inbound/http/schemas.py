"""HTTP adapter schemas for external integrations."""

from pydantic import BaseModel, ConfigDict


class WebhookAcknowledgement(BaseModel):
    """Acknowledgement returned to Stripe once the signature is verified."""

    received: bool = True

    model_config = ConfigDict(json_schema_extra={"example": {"received": True}})


class SuccessResponse(BaseModel):
    """Plain success flag returned by submit, login, logout and delete."""

    success: bool = True

    model_config = ConfigDict(json_schema_extra={"example": {"success": True}})


class ErrorResponse(BaseModel):
    """Localized error payload."""

    error: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Champs obligatoires manquants."}}
    )
