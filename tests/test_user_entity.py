"""
Tests for the User entity validation and mutation rules
"""

import uuid

import pytest

from simple_example.database.entities import User
from simple_example.utils.exceptions import UserValidationError


class TestUserEntity:

    def test_constructor_assigns_identity_and_timestamps(self):
        user = User("Matti", "Meikäläinen", "matti@example.com")

        assert isinstance(user.id, uuid.UUID)
        assert user.created_at is not None
        assert user.updated_at == user.created_at

    def test_constructor_strips_whitespace(self):
        user = User("  Matti ", " Meikäläinen", " matti@example.com ")

        assert user.first_name == "Matti"
        assert user.last_name == "Meikäläinen"
        assert user.email == "matti@example.com"

    def test_each_user_gets_a_distinct_id(self):
        first = User("Matti", "M", "m@m.com")
        second = User("Maija", "V", "m@v.com")

        assert first.id != second.id

    @pytest.mark.parametrize("first_name,last_name,email,field", [
        ("", "Meikäläinen", "matti@example.com", "first_name"),
        ("Matti", "   ", "matti@example.com", "last_name"),
        ("Matti", "Meikäläinen", "", "email"),
        ("Matti", "Meikäläinen", "not-an-email", "email"),
        ("M" * 101, "Meikäläinen", "matti@example.com", "first_name"),
    ])
    def test_constructor_rejects_invalid_input(self, first_name, last_name, email, field):
        with pytest.raises(UserValidationError) as exc_info:
            User(first_name, last_name, email)

        assert exc_info.value.field == field

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            User("", "", "")

    def test_update_basic_info_changes_names_only(self):
        user = User("Matti", "Meikäläinen", "matti@example.com")

        user.update_basic_info("Matukka", "Meikäleissön")

        assert user.first_name == "Matukka"
        assert user.last_name == "Meikäleissön"
        assert user.email == "matti@example.com"
        assert user.updated_at >= user.created_at

    def test_update_basic_info_leaves_user_untouched_on_error(self):
        user = User("Matti", "Meikäläinen", "matti@example.com")

        with pytest.raises(UserValidationError):
            user.update_basic_info("Pekka", "")

        assert user.first_name == "Matti"
        assert user.last_name == "Meikäläinen"

    def test_update_email(self):
        user = User("Matti", "Meikäläinen", "matti@example.com")

        user.update_email("matti.m@example.com")

        assert user.email == "matti.m@example.com"

    def test_update_email_rejects_invalid_address(self):
        user = User("Matti", "Meikäläinen", "matti@example.com")

        with pytest.raises(UserValidationError):
            user.update_email("matti.example.com")

        assert user.email == "matti@example.com"
