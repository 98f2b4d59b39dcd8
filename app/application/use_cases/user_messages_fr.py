"""French user-facing messages for Aura Intuitive."""


class UserMessagesFR:
    """Centralized French user-facing messages."""

    # Customer form submission
    MISSING_REQUIRED_FIELDS = "Champs obligatoires manquants."
    INVALID_REQUEST = "Requête invalide."
    PAYMENT_NOT_VERIFIED = "Paiement non vérifié."
    INVALID_PAYMENT_SESSION = "Session de paiement invalide."
    ALREADY_SUBMITTED = "Vous avez déjà soumis votre question pour cette consultation."
    SAVE_FAILED = "Erreur lors de l'enregistrement."

    # Admin authentication
    WRONG_PASSWORD = "Mot de passe incorrect."
    UNAUTHORIZED = "Non autorisé."

    # Admin dashboard
    DATABASE_ERROR = "Erreur base de données."
    MISSING_FIELDS = "Champs manquants."
    CONSULTATION_NOT_FOUND = "Consultation introuvable."
    NOT_YET_SUBMITTED = "Cette consultation n'a pas encore été soumise."
    UPDATE_FAILED = "Erreur lors de la mise à jour."
    DELETE_FAILED = "Erreur lors de la suppression."

    # Admin response outcome
    RESPONSE_SAVED_EMAIL_SENT = "Réponse enregistrée et email envoyé !"
    RESPONSE_SAVED_EMAIL_FAILED = (
        "Réponse enregistrée ✅ mais l'email n'a pas pu être envoyé. "
        "Vous pouvez copier la réponse et l'envoyer manuellement."
    )

    @staticmethod
    def response_email_subject(service: str) -> str:
        """Generate the subject of the guidance email."""
        return f"🔮 Votre guidance Aura Intuitive — {service}"
