"""Unit tests for signup, login and user info routes."""

import os
import unittest
from unittest.mock import patch

from bson import ObjectId
from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_user_repo
from api.security import verify_token
from adapter.fake.user_repository import FakeUserRepository


@patch.dict(os.environ, {"JWT_SECRET_KEY": "test-secret", "BCRYPT_ROUNDS": "4"})
class TestAuthRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.user_repo = FakeUserRepository()
        app.dependency_overrides[get_user_repo] = lambda: self.user_repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def _signup(self, username='hello', password='world'):
        return self.client.post("/api/v1/user/signup", json={"username": username, "password": password})

    def test_signup_returns_public_user(self):
        response = self._signup()

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(set(data), {'id', 'username'})
        self.assertEqual(data['username'], 'hello')

    def test_signup_without_username(self):
        response = self.client.post("/api/v1/user/signup", json={"password": "world"})
        self.assertEqual(response.status_code, 400)
        self.assertIn('username', response.json()['detail'])

    def test_signup_without_password(self):
        response = self.client.post("/api/v1/user/signup", json={"username": "hello"})
        self.assertEqual(response.status_code, 400)

    def test_signup_duplicate(self):
        self._signup()
        response = self._signup()
        self.assertEqual(response.status_code, 409)

    def test_login_returns_token_for_user(self):
        user_id = self._signup().json()['id']

        response = self.client.post("/api/v1/user/login", json={"username": "hello", "password": "world"})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(verify_token(data['token']), user_id)
        self.assertEqual(data['user'], {'id': user_id, 'username': 'hello'})

    def test_login_wrong_username(self):
        self._signup()
        response = self.client.post("/api/v1/user/login", json={"username": "nope", "password": "world"})
        self.assertEqual(response.status_code, 401)
        self.assertIn('username', response.json()['detail'])

    def test_login_wrong_password(self):
        self._signup()
        response = self.client.post("/api/v1/user/login", json={"username": "hello", "password": "nope"})
        self.assertEqual(response.status_code, 401)
        self.assertIn('password', response.json()['detail'])

    def test_long_password_signup_and_login(self):
        long_password = 'p' * 100
        self.assertEqual(self._signup(password=long_password).status_code, 201)

        ok = self.client.post("/api/v1/user/login", json={"username": "hello", "password": long_password})
        wrong = self.client.post("/api/v1/user/login", json={"username": "hello", "password": 'q' * 100})

        self.assertEqual(ok.status_code, 200)
        self.assertEqual(wrong.status_code, 401)
        self.assertIn('password', wrong.json()['detail'])

    def test_user_info(self):
        user_id = self._signup().json()['id']
        response = self.client.get(f"/api/v1/users/{user_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'id': user_id, 'username': 'hello'})

    def test_user_info_unknown(self):
        response = self.client.get(f"/api/v1/users/{ObjectId()}")
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
