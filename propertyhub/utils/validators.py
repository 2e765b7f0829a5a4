from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from email_validator import validate_email as email_validator, EmailNotValidError

from propertyhub.errors import ValidationError

TRUE_VALUES = ('true', '1', 'yes')
FALSE_VALUES = ('false', '0', 'no')


def validate_email(email):
    """Validate email address"""
    try:
        email_validator(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def parse_int(value, field, minimum=None):
    """Parse an integer field, raising ValidationError on bad input"""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(value)
        number = int(str(value).strip()) if not isinstance(value, (int, float)) else int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')
    if minimum is not None and number < minimum:
        raise ValidationError(f'{field} must be at least {minimum}')
    return number


def parse_decimal(value, field, minimum=None, maximum=None, places='0.01'):
    """Parse a decimal field rounded to the given number of places"""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f'{field} must be a number')
    if not number.is_finite():
        raise ValidationError(f'{field} must be a number')
    if minimum is not None and number < minimum:
        raise ValidationError(f'{field} must be at least {minimum}')
    if maximum is not None and number > maximum:
        raise ValidationError(f'{field} must be at most {maximum}')
    return number.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def parse_float(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number')


def parse_date(value, field):
    """Parse an ISO date, accepting full timestamps by keeping the date part"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip().split('T')[0], '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a date in YYYY-MM-DD format')


def parse_bool(value, field):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f'{field} must be true or false')
