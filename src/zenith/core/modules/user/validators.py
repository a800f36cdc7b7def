from zenith.errors import ValidationError

MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts passwords up to 72 bytes
MAX_PASSWORD_BYTES = 72


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Raises:
        ValidationError: If password is shorter than MIN_PASSWORD_LENGTH
            or longer than MAX_PASSWORD_BYTES once UTF-8 encoded
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if not fits_bcrypt(password):
        raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.")


def fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def validate_registration(email: str, password: str, display_name: str) -> None:
    if not email.strip() or not password or not display_name.strip():
        raise ValidationError("Please provide all required fields.")
    if "@" not in email:
        raise ValidationError("Please enter a valid email address.")
    validate_password(password)


def normalize_email(email: str) -> str:
    return email.strip().lower()
