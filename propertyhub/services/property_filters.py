from propertyhub.errors import ValidationError
from propertyhub.models.property import Property
from propertyhub.utils.validators import parse_bool, parse_date, parse_float, parse_int

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
MAX_LIMIT = 100
# Largest row offset every supported backend accepts (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1
DEFAULT_SORT = 'created_desc'

# Values the UI sends to mean "no constraint"
SENTINELS = ('', 'all', 'any')

SORT_OPTIONS = {
    'price_asc': (Property.price.asc(), Property.id.asc()),
    'price_desc': (Property.price.desc(), Property.id.desc()),
    'created_asc': (Property.created_at.asc(), Property.id.asc()),
    'created_desc': (Property.created_at.desc(), Property.id.desc()),
}


def _blank(value):
    return value is None or (isinstance(value, str) and value.strip().lower() in SENTINELS)


def _contains(column, value):
    """Case-insensitive substring match with LIKE wildcards escaped"""
    escaped = value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return column.ilike(f'%{escaped}%', escape='\\')


class PropertyFilters:
    """Conjunctive listing filters plus sort order and page window"""

    def __init__(self, price_min=None, price_max=None, area_min=None, area_max=None,
                 bedrooms=None, bathrooms=None, city=None, state=None, country=None,
                 type=None, furnished=None, listing_type=None, is_verified=None,
                 amenities=None, tags=None, available_from_after=None,
                 available_from_before=None, created_by=None, sort=None,
                 page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
        self.price_min = price_min
        self.price_max = price_max
        self.area_min = area_min
        self.area_max = area_max
        self.bedrooms = bedrooms
        self.bathrooms = bathrooms
        self.city = city
        self.state = state
        self.country = country
        self.type = type
        self.furnished = furnished
        self.listing_type = listing_type
        self.is_verified = is_verified
        self.amenities = amenities
        self.tags = tags
        self.available_from_after = available_from_after
        self.available_from_before = available_from_before
        self.created_by = created_by
        self.sort = sort or DEFAULT_SORT
        self.page = page
        self.limit = limit

        if self.sort not in SORT_OPTIONS:
            raise ValidationError(f'Invalid sort option: {self.sort}',
                                  payload={'allowed': sorted(SORT_OPTIONS)})
        if self.page < 1:
            raise ValidationError('page must be at least 1')
        if self.limit < 1:
            raise ValidationError('limit must be at least 1')
        if self.limit > MAX_LIMIT:
            raise ValidationError(f'limit must be at most {MAX_LIMIT}')
        if (self.page - 1) * self.limit > MAX_OFFSET:
            raise ValidationError('page is out of range')

    @classmethod
    def from_args(cls, args):
        """Build filters from query parameters; sentinels and blanks are ignored"""

        def text(name):
            value = args.get(name)
            return None if _blank(value) else str(value).strip()

        def number(name, parser):
            value = args.get(name)
            return None if _blank(value) else parser(value, name)

        page = number('page', parse_int)
        limit = number('limit', parse_int)

        return cls(
            price_min=number('priceMin', parse_float),
            price_max=number('priceMax', parse_float),
            area_min=number('areaMin', parse_float),
            area_max=number('areaMax', parse_float),
            bedrooms=number('bedrooms', parse_int),
            bathrooms=number('bathrooms', parse_int),
            city=text('city'),
            state=text('state'),
            country=text('country'),
            type=text('type'),
            furnished=text('furnished'),
            listing_type=text('listingType'),
            is_verified=number('isVerified', parse_bool),
            amenities=text('amenities'),
            tags=text('tags'),
            available_from_after=number('availableFromAfter', parse_date),
            available_from_before=number('availableFromBefore', parse_date),
            created_by=number('createdBy', parse_int),
            sort=text('sort'),
            page=DEFAULT_PAGE if page is None else page,
            limit=DEFAULT_LIMIT if limit is None else limit,
        )

    def apply(self, query):
        """Narrow a Property query by every supplied predicate"""
        if self.price_min is not None:
            query = query.filter(Property.price >= self.price_min)
        if self.price_max is not None:
            query = query.filter(Property.price <= self.price_max)
        if self.area_min is not None:
            query = query.filter(Property.area >= self.area_min)
        if self.area_max is not None:
            query = query.filter(Property.area <= self.area_max)
        if self.bedrooms is not None:
            query = query.filter(Property.bedrooms >= self.bedrooms)
        if self.bathrooms is not None:
            query = query.filter(Property.bathrooms >= self.bathrooms)

        if self.city:
            query = query.filter(_contains(Property.city, self.city))
        if self.state:
            query = query.filter(_contains(Property.state, self.state))
        if self.country:
            query = query.filter(_contains(Property.country, self.country))

        if self.type:
            query = query.filter(Property.type == self.type)
        if self.furnished:
            query = query.filter(Property.furnished == self.furnished)
        if self.listing_type:
            query = query.filter(Property.listing_type == self.listing_type)
        if self.is_verified is not None:
            query = query.filter(Property.is_verified == self.is_verified)

        if self.amenities:
            query = query.filter(_contains(Property.amenities_text, self.amenities))
        if self.tags:
            query = query.filter(_contains(Property.tags_text, self.tags))

        if self.available_from_after is not None:
            query = query.filter(Property.available_from >= self.available_from_after)
        if self.available_from_before is not None:
            query = query.filter(Property.available_from <= self.available_from_before)

        if self.created_by is not None:
            query = query.filter(Property.created_by == self.created_by)

        return query

    def ordering(self):
        return SORT_OPTIONS[self.sort]

    def to_dict(self):
        return {
            'priceMin': self.price_min,
            'priceMax': self.price_max,
            'areaMin': self.area_min,
            'areaMax': self.area_max,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'type': self.type,
            'furnished': self.furnished,
            'listingType': self.listing_type,
            'isVerified': self.is_verified,
            'amenities': self.amenities,
            'tags': self.tags,
            'availableFromAfter': self.available_from_after.isoformat() if self.available_from_after else None,
            'availableFromBefore': self.available_from_before.isoformat() if self.available_from_before else None,
            'createdBy': self.created_by,
            'sort': self.sort,
            'page': self.page,
            'limit': self.limit,
        }
