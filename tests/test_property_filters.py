import math
import random
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from propertyhub import db
from propertyhub.errors import NotFoundError, ValidationError
from propertyhub.models.property import Property
from propertyhub.services.cache_service import NullResultCache
from propertyhub.services.property_filters import MAX_LIMIT, PropertyFilters
from propertyhub.services.property_service import PropertyService

CITIES = ['Lakeview', 'Springfield', 'Lake City', 'Riverside', 'Hillview']
STATES = ['Oregon', 'Ohio', 'Texas']
COUNTRIES = ['USA', 'Canada']
TYPES = ['House', 'Apartment', 'Condo', 'Villa', 'Townhouse']
FURNISHED = ['Yes', 'No', 'Partially']
LISTING_TYPES = ['Sale', 'Rent', 'Lease']
AMENITIES = ['Pool', 'Gym', 'Parking', 'Garden', 'Wifi']
TAGS = ['luxury', 'new', 'waterfront', 'quiet']


def seed_properties(owner_id, rng, count):
    base = datetime(2026, 1, 1)
    for i in range(count):
        db.session.add(Property(
            title=f'Listing {i}',
            price=Decimal(rng.randrange(10, 500) * 1000),
            area=rng.choice([None, rng.randrange(400, 4000)]),
            bedrooms=rng.choice([None, 0, 1, 2, 3, 4, 5]),
            bathrooms=rng.choice([None, 1, 2, 3]),
            city=rng.choice(CITIES),
            state=rng.choice(STATES + [None]),
            country=rng.choice(COUNTRIES),
            type=rng.choice(TYPES),
            furnished=rng.choice(FURNISHED),
            listing_type=rng.choice(LISTING_TYPES),
            is_verified=rng.random() < 0.5,
            amenities=rng.sample(AMENITIES, rng.randrange(0, 4)),
            tags=rng.sample(TAGS, rng.randrange(0, 3)),
            available_from=rng.choice([None, date(2026, 1, 1) + timedelta(days=rng.randrange(0, 365))]),
            created_by=owner_id,
            created_at=base + timedelta(hours=i),
        ))
    db.session.commit()


def random_args(rng):
    candidates = {
        'priceMin': lambda: str(rng.randrange(10, 300) * 1000),
        'priceMax': lambda: str(rng.randrange(200, 500) * 1000),
        'areaMin': lambda: str(rng.randrange(400, 2000)),
        'areaMax': lambda: str(rng.randrange(1500, 4000)),
        'bedrooms': lambda: str(rng.randrange(0, 5)),
        'bathrooms': lambda: str(rng.randrange(1, 3)),
        'city': lambda: rng.choice(['lake', 'VIEW', 'side', 'Springfield', 'all']),
        'state': lambda: rng.choice(['o', 'TEX', 'all']),
        'country': lambda: rng.choice(['usa', 'an', 'all']),
        'type': lambda: rng.choice(TYPES + ['all']),
        'furnished': lambda: rng.choice(FURNISHED + ['any']),
        'listingType': lambda: rng.choice(LISTING_TYPES + ['all']),
        'isVerified': lambda: rng.choice(['true', 'false', 'all']),
        'amenities': lambda: rng.choice(['pool', 'GYM', 'park', 'Wifi']),
        'tags': lambda: rng.choice(['lux', 'NEW', 'water']),
        'availableFromAfter': lambda: (date(2026, 1, 1) + timedelta(days=rng.randrange(0, 200))).isoformat(),
        'availableFromBefore': lambda: (date(2026, 1, 1) + timedelta(days=rng.randrange(150, 365))).isoformat(),
    }
    return {key: make() for key, make in candidates.items() if rng.random() < 0.3}


def reference_match(p, args):
    """Brute-force evaluation of the conjunctive filter semantics"""

    def contains(haystack, needle):
        return haystack is not None and needle.lower() in haystack.lower()

    def given(key, sentinels=('all', 'any')):
        return key in args and args[key].lower() not in sentinels

    price = float(p['price'])
    if given('priceMin') and not price >= float(args['priceMin']):
        return False
    if given('priceMax') and not price <= float(args['priceMax']):
        return False
    if given('areaMin') and (p['area'] is None or p['area'] < float(args['areaMin'])):
        return False
    if given('areaMax') and (p['area'] is None or p['area'] > float(args['areaMax'])):
        return False
    if given('bedrooms') and (p['bedrooms'] is None or p['bedrooms'] < int(args['bedrooms'])):
        return False
    if given('bathrooms') and (p['bathrooms'] is None or p['bathrooms'] < int(args['bathrooms'])):
        return False
    for key in ('city', 'state', 'country'):
        if given(key) and not contains(p[key], args[key]):
            return False
    for key in ('type', 'furnished', 'listingType'):
        if given(key) and p[key] != args[key]:
            return False
    if given('isVerified') and p['isVerified'] != (args['isVerified'] == 'true'):
        return False
    for key in ('amenities', 'tags'):
        if given(key) and not contains('|'.join(p[key]) or None, args[key]):
            return False
    available = date.fromisoformat(p['availableFrom']) if p['availableFrom'] else None
    if given('availableFromAfter') and (available is None or available < date.fromisoformat(args['availableFromAfter'])):
        return False
    if given('availableFromBefore') and (available is None or available > date.fromisoformat(args['availableFromBefore'])):
        return False
    return True


@pytest.mark.parametrize('seed', range(10))
def test_filters_match_brute_force_reference(app, make_user, seed):
    rng = random.Random(seed)
    owner_id = make_user()

    with app.app_context():
        seed_properties(owner_id, rng, 40)
        service = PropertyService(NullResultCache())
        everything = service.list(PropertyFilters(limit=100))['properties']
        assert len(everything) == 40

        for _ in range(15):
            args = random_args(rng)
            args.update({'sort': 'price_asc', 'limit': '100'})

            result = service.list(PropertyFilters.from_args(args))

            expected = sorted((p for p in everything if reference_match(p, args)),
                              key=lambda p: (p['price'], p['id']))
            assert [p['id'] for p in result['properties']] == [p['id'] for p in expected], args
            assert result['total'] == len(expected)


def test_price_range_sorted_ascending(app, make_user):
    owner_id = make_user()
    with app.app_context():
        service = PropertyService(NullResultCache())
        for price in (40000, 60000, 90000, 120000, 200000):
            service.create({'title': f'Home {price}', 'price': price, 'city': 'Lakeview'}, owner_id)

        result = service.list(PropertyFilters.from_args({
            'priceMin': '50000', 'priceMax': '150000', 'sort': 'price_asc',
        }))

    assert [p['price'] for p in result['properties']] == [60000, 90000, 120000]
    assert result['total'] == 3


def test_price_descending(app, make_user):
    owner_id = make_user()
    with app.app_context():
        service = PropertyService(NullResultCache())
        for price in (40000, 200000, 90000):
            service.create({'title': f'Home {price}', 'price': price, 'city': 'Lakeview'}, owner_id)

        result = service.list(PropertyFilters(sort='price_desc'))

    assert [p['price'] for p in result['properties']] == [200000, 90000, 40000]


def test_default_sort_is_newest_first(app, make_user):
    owner_id = make_user()
    with app.app_context():
        seed_properties(owner_id, random.Random(1), 5)
        result = PropertyService(NullResultCache()).list(PropertyFilters())
        created = [p['createdAt'] for p in result['properties']]

        ascending = PropertyService(NullResultCache()).list(PropertyFilters(sort='created_asc'))

    assert created == sorted(created, reverse=True)
    assert [p['createdAt'] for p in ascending['properties']] == sorted(created)


def test_pagination_windows(app, make_user):
    owner_id = make_user()
    with app.app_context():
        seed_properties(owner_id, random.Random(2), 30)
        service = PropertyService(NullResultCache())

        first = service.list(PropertyFilters(page=1, limit=12))
        third = service.list(PropertyFilters(page=3, limit=12))
        beyond = service.list(PropertyFilters(page=4, limit=12))

    assert len(first['properties']) == 12
    assert len(third['properties']) == 6
    assert beyond['properties'] == []
    for page in (first, third, beyond):
        assert page['total'] == 30
        assert page['totalPages'] == math.ceil(30 / 12) == 3
    assert first['page'] == 1 and third['page'] == 3


def test_pages_do_not_overlap(app, make_user):
    owner_id = make_user()
    with app.app_context():
        seed_properties(owner_id, random.Random(3), 25)
        service = PropertyService(NullResultCache())
        ids = []
        for page in (1, 2, 3):
            ids += [p['id'] for p in service.list(PropertyFilters(page=page, limit=10))['properties']]

    assert len(ids) == len(set(ids)) == 25


def test_empty_result_has_zero_pages(app):
    with app.app_context():
        result = PropertyService(NullResultCache()).list(PropertyFilters())

    assert result == {'properties': [], 'total': 0, 'page': 1, 'totalPages': 0}


def test_sentinels_impose_no_constraint(app, make_user):
    owner_id = make_user()
    with app.app_context():
        seed_properties(owner_id, random.Random(4), 12)
        service = PropertyService(NullResultCache())

        result = service.list(PropertyFilters.from_args({
            'city': 'all', 'type': 'all', 'furnished': 'any', 'listingType': 'all',
            'isVerified': 'all', 'priceMin': '', 'limit': '50',
        }))

    assert result['total'] == 12


def test_like_wildcards_are_literal(app, make_user):
    owner_id = make_user()
    with app.app_context():
        service = PropertyService(NullResultCache())
        service.create({'title': 'A', 'price': 1000, 'city': 'Lakeview'}, owner_id)
        service.create({'title': 'B', 'price': 1000, 'city': '100%_Town'}, owner_id)

        assert service.list(PropertyFilters.from_args({'city': '%'}))['total'] == 1
        assert service.list(PropertyFilters.from_args({'city': '_'}))['total'] == 1
        assert service.list(PropertyFilters.from_args({'city': 'lake'}))['total'] == 1


def test_created_by_filter(app, make_user):
    alice = make_user(name='Alice', email='a@x.com')
    bob = make_user(name='Bob', email='b@x.com')
    with app.app_context():
        service = PropertyService(NullResultCache())
        service.create({'title': 'A', 'price': 1000, 'city': 'Lakeview'}, alice)
        service.create({'title': 'B', 'price': 1000, 'city': 'Lakeview'}, bob)

        result = service.list(PropertyFilters.from_args({'createdBy': str(bob)}))

    assert [p['title'] for p in result['properties']] == ['B']


@pytest.mark.parametrize('args', [
    {'sort': 'rating_desc'},
    {'page': '0'},
    {'limit': '0'},
    {'limit': str(MAX_LIMIT + 1)},
    {'page': str(10 ** 19)},
    {'priceMin': 'cheap'},
    {'bedrooms': 'two'},
    {'isVerified': 'maybe'},
    {'availableFromAfter': 'next week'},
])
def test_malformed_query_is_a_validation_error(args):
    with pytest.raises(ValidationError):
        PropertyFilters.from_args(args)


def test_unresolvable_owner_gets_placeholder(app, make_user):
    owner_id = make_user()
    with app.app_context():
        db.session.add(Property(title='Orphan', price=Decimal('5000'), city='Lakeview', created_by=owner_id + 100))
        db.session.commit()
        orphan_id = Property.query.filter_by(title='Orphan').one().id
        service = PropertyService(NullResultCache())

        listing = service.list(PropertyFilters())

        assert listing['total'] == 1
        assert listing['properties'][0]['owner'] == {'id': owner_id + 100, 'name': 'Unknown', 'email': ''}
        with pytest.raises(NotFoundError):
            service.get(orphan_id)
