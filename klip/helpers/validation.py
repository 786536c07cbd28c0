import uuid

from klip.helpers.grades import is_valid_cotation

INVALID_COTATION_MESSAGE = "Cotation invalide (ex: 6a, 7b+)"


class ValidationError(ValueError):
    """Bad client input; the message is shown to the user as-is."""


class NotFoundError(LookupError):
    """A referenced parent entity does not exist."""


def require_name(data: dict, key: str = "name", max_length: int = 200) -> str:
    raw = data.get(key)
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Le nom est requis")
    name = raw.strip()
    if len(name) > max_length:
        raise ValidationError(f"Le nom ne doit pas dépasser {max_length} caractères")
    return name


def optional_text(data: dict, key: str, max_length: int):
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValidationError(f"Champ '{key}' invalide")
    if len(raw) > max_length:
        raise ValidationError(f"Le champ '{key}' ne doit pas dépasser {max_length} caractères")
    return raw.strip() or None


def optional_bool(data: dict, key: str):
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise ValidationError(f"Champ '{key}' invalide")
    return raw


def _is_int(value) -> bool:
    # bool is an int subclass; JSON true must not pass as 1
    return isinstance(value, int) and not isinstance(value, bool)


def optional_positive_int(data: dict, key: str, message: str = None):
    raw = data.get(key)
    if raw is None:
        return None
    if not _is_int(raw) or raw <= 0:
        raise ValidationError(message or f"Le champ '{key}' doit être un entier positif")
    return raw


def require_positive_int(data: dict, key: str, message: str):
    if data.get(key) is None:
        raise ValidationError(message)
    return optional_positive_int(data, key, message)


def optional_cotation(data: dict, key: str = "cotation"):
    """
    None/absent passes through. Anything else must be a 3..9 French grade;
    stored lowercased so "6A+" and "6a+" are the same value.
    """
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str) or len(raw) > 10:
        raise ValidationError(INVALID_COTATION_MESSAGE)
    if not is_valid_cotation(raw):
        raise ValidationError(INVALID_COTATION_MESSAGE)
    return raw.lower()


def require_uuid(value, message: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        raise ValidationError(message)
