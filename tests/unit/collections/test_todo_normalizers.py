"""Tests for todo normalizers."""

import pytest

from homedash.core.modules.todo.normalizers import normalize_todo_create, normalize_todo_update
from homedash.errors import ValidationError


class TestNormalizeTodoCreate:
    def test_defaults_to_not_done(self):
        assert normalize_todo_create({"text": " Buy milk "}) == {"text": "Buy milk", "done": False}

    def test_done_flag_kept(self):
        assert normalize_todo_create({"text": "Ship it", "done": True}) == {"text": "Ship it", "done": True}

    def test_non_boolean_done_ignored(self):
        assert normalize_todo_create({"text": "Ship it", "done": "true"})["done"] is False

    @pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "   "}, {"text": 5}])
    def test_text_required(self, payload):
        with pytest.raises(ValidationError, match="Todo text is required"):
            normalize_todo_create(payload)


class TestNormalizeTodoUpdate:
    def test_toggle_done(self):
        assert normalize_todo_update({"done": True}, None) == {"done": True}
        assert normalize_todo_update({"done": 0}, None) == {"done": False}

    def test_text_updated(self):
        assert normalize_todo_update({"text": " Call mom "}, None) == {"text": "Call mom"}

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError, match="Todo text cannot be empty"):
            normalize_todo_update({"text": " "}, None)

    def test_unknown_fields_ignored(self):
        assert normalize_todo_update({"priority": "high"}, None) == {}
