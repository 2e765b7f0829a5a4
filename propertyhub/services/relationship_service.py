import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from propertyhub import db
from propertyhub.errors import NotFoundError
from propertyhub.models.favorite import Favorite
from propertyhub.models.property import Property
from propertyhub.models.recommendation import Recommendation
from propertyhub.models.user import User
from propertyhub.utils.email import send_recommendation_email

logger = logging.getLogger(__name__)


def add_favorite(user_id, property_id):
    """Favorite a property; returns (favorite, created). Re-adding is a no-op."""
    existing = Favorite.query.filter_by(user_id=user_id, property_id=property_id).first()
    if existing:
        return existing, False

    if db.session.get(Property, property_id) is None:
        raise NotFoundError('Property not found')

    favorite = Favorite(user_id=user_id, property_id=property_id)
    db.session.add(favorite)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same pair
        db.session.rollback()
        return Favorite.query.filter_by(user_id=user_id, property_id=property_id).one(), False

    return favorite, True


def remove_favorite(user_id, property_id):
    favorite = Favorite.query.filter_by(user_id=user_id, property_id=property_id).first()
    if not favorite:
        raise NotFoundError('Favorite not found')

    db.session.delete(favorite)
    db.session.commit()
    return True


def list_favorites(user_id):
    """Favorited properties with owners, in the order they were added"""
    favorites = Favorite.query.filter_by(user_id=user_id).options(
        joinedload(Favorite.property).joinedload(Property.owner)
    ).order_by(Favorite.id.asc()).all()
    return [f.property.to_dict() for f in favorites if f.property is not None]


def recommend(from_user_id, recipient_email, property_id):
    """Recommend a property to the user owning recipient_email.

    Returns the new Recommendation, or None when the recipient or the
    property does not exist.
    """
    recipient = User.query.filter_by(email=recipient_email).first()
    if not recipient:
        return None

    property = db.session.get(Property, property_id)
    if not property:
        return None

    recommendation = Recommendation(
        from_user_id=from_user_id,
        to_user_id=recipient.id,
        property_id=property.id,
    )
    db.session.add(recommendation)
    db.session.commit()
    logger.info('User %s recommended property %s to user %s', from_user_id, property.id, recipient.id)

    sender = db.session.get(User, from_user_id)
    send_recommendation_email(
        recipient.email,
        sender.name if sender else 'A PropertyHub user',
        property.to_dict(include_owner=False),
    )

    return recommendation


def list_recommendations_received(user_id):
    """One entry per recommendation addressed to the user"""
    recommendations = Recommendation.query.filter_by(to_user_id=user_id).options(
        joinedload(Recommendation.property).joinedload(Property.owner),
        joinedload(Recommendation.sender),
    ).order_by(Recommendation.id.asc()).all()

    results = []
    for rec in recommendations:
        if rec.property is None:
            continue
        data = rec.property.to_dict()
        data['recommendedBy'] = rec.sender.to_dict() if rec.sender else None
        data['recommendedAt'] = rec.created_at.isoformat() if rec.created_at else None
        results.append(data)
    return results
