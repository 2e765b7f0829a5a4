import hashlib
import json
import logging
import uuid
from flask import current_app

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60
GENERATION_KEY = 'generation'


class ResultCache:
    """Read-through cache for listing pages and single property lookups.

    Wraps any backend exposing ``get``, ``set`` and ``clear`` (a Flask-Caching
    ``Cache`` in the app). Entries are stored under the current generation
    token and every property write flushes the cache and starts a new
    generation. A value loaded before a flush is written under the old token,
    where no later read looks, so a read never returns data older than the
    latest completed write.
    """

    def __init__(self, backend=None, ttl=DEFAULT_TTL):
        self.backend = backend
        self.ttl = ttl

    def generation(self):
        """Current generation token, starting one if the backend has none"""
        if self.backend is None:
            return None
        token = self.backend.get(GENERATION_KEY)
        if token is None:
            token = self._new_generation()
        return token

    def _new_generation(self):
        token = uuid.uuid4().hex
        # 0 = no expiry
        self.backend.set(GENERATION_KEY, token, timeout=0)
        return token

    def get(self, key, generation=None):
        if self.backend is None:
            return None
        generation = generation or self.generation()
        value = self.backend.get(f'{generation}:{key}')
        logger.debug('Cache %s for %s', 'hit' if value is not None else 'miss', key)
        return value

    def set(self, key, value, ttl=None, generation=None):
        if self.backend is None:
            return
        generation = generation or self.generation()
        self.backend.set(f'{generation}:{key}', value, timeout=ttl if ttl is not None else self.ttl)

    def flush(self):
        if self.backend is None:
            return
        self.backend.clear()
        self._new_generation()
        logger.info('Result cache flushed')

    def get_or_set(self, key, loader, ttl=None):
        """Return the cached value for key, populating it from loader on a miss"""
        generation = self.generation()
        value = self.get(key, generation)
        if value is not None:
            return value
        value = loader()
        if value is not None:
            self.set(key, value, ttl, generation)
        return value


class NullResultCache(ResultCache):
    """Cache that never stores anything"""

    def __init__(self):
        super().__init__(backend=None)


def property_key(property_id):
    return f'property:{property_id}'


def listing_key(params):
    """Stable key for a listing query, independent of parameter order"""
    encoded = json.dumps(params, sort_keys=True, default=str)
    return 'properties:' + hashlib.sha256(encoded.encode('utf-8')).hexdigest()


def get_result_cache():
    return current_app.extensions.get('result_cache') or NullResultCache()
