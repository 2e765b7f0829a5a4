import logging
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import IntegrityError

from propertyhub import db
from propertyhub.errors import AuthenticationError, ConflictError, ValidationError
from propertyhub.models.user import User
from propertyhub.utils.sanitizers import sanitize_string
from propertyhub.utils.validators import validate_email

logger = logging.getLogger(__name__)


def generate_token(user):
    """Issue a signed bearer token carrying the user's id and email"""
    return create_access_token(identity=str(user.id), additional_claims={'email': user.email})


def verify_token(token):
    """Decode a bearer token into {'id', 'email'}, or raise AuthenticationError"""
    if not token:
        raise AuthenticationError('No token provided')
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException):
        raise AuthenticationError('Invalid token')
    try:
        return {'id': int(claims['sub']), 'email': claims['email']}
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError('Invalid token')


def register(name, email, password):
    """Create an account and return (user, token)"""
    name = sanitize_string(name)
    email = sanitize_string(email)

    if not name or not email or not password:
        raise ValidationError('Name, email and password are required')

    if not isinstance(password, str):
        raise ValidationError('Password must be a string')

    if not validate_email(email):
        raise ValidationError('Invalid email format')

    if User.query.filter_by(email=email).first():
        raise ConflictError('User already exists')

    user = User(name=name, email=email)
    user.set_password(password)

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('User already exists')
    logger.info('Registered user %s', user.id)

    return user, generate_token(user)


def login(email, password):
    """Check credentials and return (user, token)"""
    email = sanitize_string(email)

    if not email or not password or not isinstance(password, str):
        raise ValidationError('Email and password are required')

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        logger.warning('Failed login attempt for %s', email)
        raise AuthenticationError('Invalid credentials')

    return user, generate_token(user)
