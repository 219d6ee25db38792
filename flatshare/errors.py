"""Domain errors and the localized message catalog.

Services raise a typed error carrying an ErrorCode. The HTTP boundary looks the
code up in the catalog for the configured locale and picks the status code from
the error class.
"""

from enum import Enum


class ErrorCode(str, Enum):
    # Auth
    AUTH_INVALID_CREDENTIALS = "auth_invalid_credentials"
    AUTH_EMAIL_ALREADY_REGISTERED = "auth_email_already_registered"
    AUTH_USER_NOT_FOUND = "auth_user_not_found"
    AUTH_SESSION_EXPIRED = "auth_session_expired"
    AUTH_UNAUTHORIZED = "auth_unauthorized"

    # Groups
    GROUP_NOT_FOUND = "group_not_found"
    GROUP_NOT_MEMBER = "group_not_member"
    GROUP_ONLY_OWNER_CAN_INVITE = "group_only_owner_can_invite"
    GROUP_ONLY_OWNER_CAN_DELETE = "group_only_owner_can_delete"
    GROUP_ONLY_OWNER_CAN_UPDATE_RULES = "group_only_owner_can_update_rules"
    GROUP_NAME_TOO_SHORT = "group_name_too_short"

    # Invitations
    INVITATION_NOT_FOUND = "invitation_not_found"
    INVITATION_NOT_YOURS = "invitation_not_yours"
    INVITATION_ALREADY_ACCEPTED = "invitation_already_accepted"
    INVITATION_ALREADY_DECLINED = "invitation_already_declined"

    # Events
    EVENT_NOT_FOUND = "event_not_found"
    EVENT_NOT_MEMBER = "event_not_member"
    EVENT_ONLY_CREATOR_OR_OWNER_CAN_DELETE = "event_only_creator_or_owner_can_delete"
    EVENT_TITLE_REQUIRED = "event_title_required"
    EVENT_DATE_REQUIRED = "event_date_required"
    EVENT_TYPE_INVALID = "event_type_invalid"
    EVENT_DATABASE_ERROR = "event_database_error"

    # Expenses
    EXPENSE_NOT_FOUND = "expense_not_found"
    EXPENSE_NOT_MEMBER = "expense_not_member"
    EXPENSE_ONLY_PAYER_OR_OWNER_CAN_DELETE = "expense_only_payer_or_owner_can_delete"
    EXPENSE_DESCRIPTION_REQUIRED = "expense_description_required"
    EXPENSE_AMOUNT_REQUIRED = "expense_amount_required"
    EXPENSE_AMOUNT_INVALID = "expense_amount_invalid"
    EXPENSE_AMOUNT_TOO_PRECISE = "expense_amount_too_precise"
    EXPENSE_DATABASE_ERROR = "expense_database_error"

    # Profile
    PROFILE_USER_NOT_FOUND = "profile_user_not_found"
    PROFILE_NAME_TOO_SHORT = "profile_name_too_short"
    PROFILE_UPDATE_FAILED = "profile_update_failed"

    # Validation
    VALIDATION_EMAIL_INVALID = "validation_email_invalid"
    VALIDATION_PASSWORD_TOO_SHORT = "validation_password_too_short"
    VALIDATION_PASSWORD_TOO_LONG = "validation_password_too_long"
    VALIDATION_NAME_TOO_SHORT = "validation_name_too_short"
    VALIDATION_FIELD_REQUIRED = "validation_field_required"
    VALIDATION_DATE_INVALID = "validation_date_invalid"

    # Server
    SERVER_INTERNAL_ERROR = "server_internal_error"
    SERVER_DATABASE_ERROR = "server_database_error"
    SERVER_SCHEMA_MISSING = "server_schema_missing"


_MESSAGES_ES: dict[ErrorCode, str] = {
    ErrorCode.AUTH_INVALID_CREDENTIALS: "Credenciales inválidas. Verifica tu correo electrónico y contraseña.",
    ErrorCode.AUTH_EMAIL_ALREADY_REGISTERED: "Este correo electrónico ya está registrado. Por favor, inicia sesión o usa otro correo.",
    ErrorCode.AUTH_USER_NOT_FOUND: "Usuario no encontrado. Por favor, verifica tu información.",
    ErrorCode.AUTH_SESSION_EXPIRED: "Tu sesión ha expirado. Por favor, inicia sesión nuevamente.",
    ErrorCode.AUTH_UNAUTHORIZED: "No estás autenticado. Por favor, inicia sesión.",
    ErrorCode.GROUP_NOT_FOUND: "El grupo no existe o ha sido eliminado.",
    ErrorCode.GROUP_NOT_MEMBER: "No eres miembro de este grupo. Debes ser invitado para acceder.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_INVITE: "Solo el propietario del grupo puede enviar invitaciones.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_DELETE: "Solo el propietario del grupo puede eliminarlo.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_UPDATE_RULES: "Solo el propietario del grupo puede actualizar las reglas.",
    ErrorCode.GROUP_NAME_TOO_SHORT: "El nombre del grupo debe tener al menos 2 caracteres.",
    ErrorCode.INVITATION_NOT_FOUND: "La invitación no existe o ya ha sido procesada.",
    ErrorCode.INVITATION_NOT_YOURS: "Esta invitación no es para tu correo electrónico.",
    ErrorCode.INVITATION_ALREADY_ACCEPTED: "Esta invitación ya ha sido aceptada.",
    ErrorCode.INVITATION_ALREADY_DECLINED: "Esta invitación ya ha sido rechazada.",
    ErrorCode.EVENT_NOT_FOUND: "El evento no existe o ha sido eliminado.",
    ErrorCode.EVENT_NOT_MEMBER: "No puedes acceder a este evento porque no eres miembro del grupo.",
    ErrorCode.EVENT_ONLY_CREATOR_OR_OWNER_CAN_DELETE: "Solo el creador del evento o el propietario del grupo pueden eliminarlo.",
    ErrorCode.EVENT_TITLE_REQUIRED: "El título del evento es obligatorio.",
    ErrorCode.EVENT_DATE_REQUIRED: "La fecha del evento es obligatoria.",
    ErrorCode.EVENT_TYPE_INVALID: "El tipo de evento no es válido. Debe ser: TASK, EVENT o REMINDER.",
    ErrorCode.EVENT_DATABASE_ERROR: "Error al guardar el evento. Verifica que la base de datos esté configurada correctamente.",
    ErrorCode.EXPENSE_NOT_FOUND: "El gasto no existe o ha sido eliminado.",
    ErrorCode.EXPENSE_NOT_MEMBER: "No puedes acceder a este gasto porque no eres miembro del grupo.",
    ErrorCode.EXPENSE_ONLY_PAYER_OR_OWNER_CAN_DELETE: "Solo quien pagó el gasto o el propietario del grupo pueden eliminarlo.",
    ErrorCode.EXPENSE_DESCRIPTION_REQUIRED: "La descripción del gasto es obligatoria.",
    ErrorCode.EXPENSE_AMOUNT_REQUIRED: "El importe del gasto es obligatorio.",
    ErrorCode.EXPENSE_AMOUNT_INVALID: "El importe debe ser un número mayor a 0.",
    ErrorCode.EXPENSE_AMOUNT_TOO_PRECISE: "El importe admite como máximo dos decimales.",
    ErrorCode.EXPENSE_DATABASE_ERROR: "Error al guardar el gasto. Verifica que la base de datos esté configurada correctamente.",
    ErrorCode.PROFILE_USER_NOT_FOUND: "No se pudo encontrar tu perfil. Por favor, recarga la página.",
    ErrorCode.PROFILE_NAME_TOO_SHORT: "El nombre debe tener al menos 2 caracteres.",
    ErrorCode.PROFILE_UPDATE_FAILED: "No se pudo actualizar tu perfil. Por favor, intenta nuevamente.",
    ErrorCode.VALIDATION_EMAIL_INVALID: "El correo electrónico no es válido.",
    ErrorCode.VALIDATION_PASSWORD_TOO_SHORT: "La contraseña debe tener al menos 6 caracteres.",
    ErrorCode.VALIDATION_PASSWORD_TOO_LONG: "La contraseña no puede superar los 72 bytes.",
    ErrorCode.VALIDATION_NAME_TOO_SHORT: "El nombre debe tener al menos 2 caracteres.",
    ErrorCode.VALIDATION_FIELD_REQUIRED: "Este campo es obligatorio.",
    ErrorCode.VALIDATION_DATE_INVALID: "La fecha no es válida.",
    ErrorCode.SERVER_INTERNAL_ERROR: "Error interno del servidor. Por favor, intenta nuevamente más tarde.",
    ErrorCode.SERVER_DATABASE_ERROR: "Error de conexión con la base de datos. Por favor, contacta al administrador.",
    ErrorCode.SERVER_SCHEMA_MISSING: "Faltan tablas en la base de datos. Reinicia la API para ejecutar init_db() o crea el esquema manualmente.",
}

_MESSAGES_EN: dict[ErrorCode, str] = {
    ErrorCode.AUTH_INVALID_CREDENTIALS: "Invalid credentials. Check your e-mail and password.",
    ErrorCode.AUTH_EMAIL_ALREADY_REGISTERED: "This e-mail is already registered. Log in or use another address.",
    ErrorCode.AUTH_USER_NOT_FOUND: "User not found. Please check your details.",
    ErrorCode.AUTH_SESSION_EXPIRED: "Your session has expired. Please log in again.",
    ErrorCode.AUTH_UNAUTHORIZED: "You are not authenticated. Please log in.",
    ErrorCode.GROUP_NOT_FOUND: "The group does not exist or has been deleted.",
    ErrorCode.GROUP_NOT_MEMBER: "You are not a member of this group. You need an invitation to access it.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_INVITE: "Only the group owner can send invitations.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_DELETE: "Only the group owner can delete it.",
    ErrorCode.GROUP_ONLY_OWNER_CAN_UPDATE_RULES: "Only the group owner can update the rules.",
    ErrorCode.GROUP_NAME_TOO_SHORT: "The group name must be at least 2 characters long.",
    ErrorCode.INVITATION_NOT_FOUND: "The invitation does not exist or has already been processed.",
    ErrorCode.INVITATION_NOT_YOURS: "This invitation is not for your e-mail address.",
    ErrorCode.INVITATION_ALREADY_ACCEPTED: "This invitation has already been accepted.",
    ErrorCode.INVITATION_ALREADY_DECLINED: "This invitation has already been declined.",
    ErrorCode.EVENT_NOT_FOUND: "The event does not exist or has been deleted.",
    ErrorCode.EVENT_NOT_MEMBER: "You cannot access this event because you are not a member of the group.",
    ErrorCode.EVENT_ONLY_CREATOR_OR_OWNER_CAN_DELETE: "Only the event creator or the group owner can delete it.",
    ErrorCode.EVENT_TITLE_REQUIRED: "The event title is required.",
    ErrorCode.EVENT_DATE_REQUIRED: "The event date is required.",
    ErrorCode.EVENT_TYPE_INVALID: "Invalid event type. Must be one of: TASK, EVENT, REMINDER.",
    ErrorCode.EVENT_DATABASE_ERROR: "Could not save the event. Check that the database is configured correctly.",
    ErrorCode.EXPENSE_NOT_FOUND: "The expense does not exist or has been deleted.",
    ErrorCode.EXPENSE_NOT_MEMBER: "You cannot access this expense because you are not a member of the group.",
    ErrorCode.EXPENSE_ONLY_PAYER_OR_OWNER_CAN_DELETE: "Only the payer or the group owner can delete this expense.",
    ErrorCode.EXPENSE_DESCRIPTION_REQUIRED: "The expense description is required.",
    ErrorCode.EXPENSE_AMOUNT_REQUIRED: "The expense amount is required.",
    ErrorCode.EXPENSE_AMOUNT_INVALID: "The amount must be a number greater than 0.",
    ErrorCode.EXPENSE_AMOUNT_TOO_PRECISE: "The amount can have at most two decimal places.",
    ErrorCode.EXPENSE_DATABASE_ERROR: "Could not save the expense. Check that the database is configured correctly.",
    ErrorCode.PROFILE_USER_NOT_FOUND: "Your profile could not be found. Please reload the page.",
    ErrorCode.PROFILE_NAME_TOO_SHORT: "The name must be at least 2 characters long.",
    ErrorCode.PROFILE_UPDATE_FAILED: "Your profile could not be updated. Please try again.",
    ErrorCode.VALIDATION_EMAIL_INVALID: "The e-mail address is not valid.",
    ErrorCode.VALIDATION_PASSWORD_TOO_SHORT: "The password must be at least 6 characters long.",
    ErrorCode.VALIDATION_PASSWORD_TOO_LONG: "The password cannot be longer than 72 bytes.",
    ErrorCode.VALIDATION_NAME_TOO_SHORT: "The name must be at least 2 characters long.",
    ErrorCode.VALIDATION_FIELD_REQUIRED: "This field is required.",
    ErrorCode.VALIDATION_DATE_INVALID: "The date is not valid.",
    ErrorCode.SERVER_INTERNAL_ERROR: "Internal server error. Please try again later.",
    ErrorCode.SERVER_DATABASE_ERROR: "Database connection error. Please contact the administrator.",
    ErrorCode.SERVER_SCHEMA_MISSING: "Database tables are missing. Restart the API to run init_db() or create the schema manually.",
}

CATALOGS: dict[str, dict[ErrorCode, str]] = {
    "es": _MESSAGES_ES,
    "en": _MESSAGES_EN,
}


def message_for(code: ErrorCode, locale: str = "es") -> str:
    catalog = CATALOGS.get(locale, _MESSAGES_ES)
    return catalog.get(code) or _MESSAGES_ES[code]


class DomainError(Exception):
    """Base for all errors raised by the services."""

    http_status = 500

    def __init__(self, code: ErrorCode):
        super().__init__(code.value)
        self.code = code


class ValidationError(DomainError):
    http_status = 400


class Unauthenticated(DomainError):
    http_status = 401


class Unauthorized(DomainError):
    """Authenticated, but lacking permission for this action."""

    http_status = 403


class NotFound(DomainError):
    http_status = 404


class Conflict(DomainError):
    http_status = 409


class InternalError(DomainError):
    http_status = 500
