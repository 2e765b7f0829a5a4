import pytest

from propertyhub import create_app, db
from propertyhub.models.user import User


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


def register(client, name, email, password='password123'):
    resp = client.post('/api/v1/auth/register', json={
        'name': name,
        'email': email,
        'password': password,
    })
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    return body['user'], body['token']


def property_payload(**overrides):
    data = {
        'title': 'Lakeside Cottage',
        'description': 'Two storey cottage by the water',
        'price': 100000,
        'area': 1200,
        'bedrooms': 2,
        'bathrooms': 1,
        'city': 'Lakeview',
        'state': 'Oregon',
        'country': 'USA',
        'type': 'House',
        'furnished': 'Yes',
        'listingType': 'Sale',
        'amenities': ['Pool', 'Garden'],
        'tags': ['waterfront'],
        'availableFrom': '2026-11-01',
    }
    data.update(overrides)
    return data


def create_property(client, token, **overrides):
    resp = client.post('/api/v1/properties', json=property_payload(**overrides),
                       headers=auth_header(token))
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture
def make_user(app):
    """Insert a user directly and return its id"""
    def _make_user(name='Owner', email='owner@x.com', password='password123'):
        with app.app_context():
            user = User(name=name, email=email)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user
