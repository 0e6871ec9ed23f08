# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for IdRegistrar and HtmlIdRegistrar."""

import pytest

from genro_fluenthtml import HtmlIdRegistrar, IdRegistrar, InvalidArgumentError


class TestIdRegistrar:
    """Tests for IdRegistrar."""

    def test_exists(self):
        """Test an id exists only after it has been handed out."""
        registrar = IdRegistrar()
        assert registrar.exists('a') is False

        registrar.unique('a')

        assert registrar.exists('a') is True

    def test_unique(self):
        """Test taken ids get their trailing number incremented."""
        registrar = IdRegistrar()
        assert registrar.unique('a') == 'a'
        assert registrar.unique('a') == 'a2'
        assert registrar.unique('a1') == 'a1'
        assert registrar.unique('a3') == 'a3'
        assert registrar.unique('a3') == 'a4'
        assert registrar.unique('a11') == 'a11'
        assert registrar.unique('a11') == 'a12'

    def test_unique_skips_taken_numbers(self):
        """Test the increment continues until a free id is found."""
        registrar = IdRegistrar()
        registrar.unique('a')
        registrar.unique('a2')
        registrar.unique('a3')
        assert registrar.unique('a') == 'a4'

    def test_unique_including_number(self):
        """Test only digits at the very end are incremented."""
        registrar = IdRegistrar()
        assert registrar.unique('a1a') == 'a1a'
        assert registrar.unique('a1a') == 'a1a2'
        assert registrar.unique('a1a2') == 'a1a3'

    def test_unique_empty(self):
        """Test an empty desired id is rejected."""
        registrar = IdRegistrar()
        with pytest.raises(InvalidArgumentError, match='non-empty'):
            registrar.unique('')

    def test_unique_zero(self):
        """Test a falsy desired id is rejected."""
        registrar = IdRegistrar()
        with pytest.raises(ValueError):
            registrar.unique(0)

    def test_registrars_are_independent(self):
        """Test separate registrars don't share ids."""
        first = IdRegistrar()
        second = IdRegistrar()
        assert first.unique('a') == 'a'
        assert second.unique('a') == 'a'

    def test_repr(self):
        """Test repr shows the number of ids."""
        registrar = IdRegistrar()
        registrar.unique('a')
        assert repr(registrar) == 'IdRegistrar(1 ids)'


class TestHtmlIdRegistrar:
    """Tests for HtmlIdRegistrar."""

    def test_default_id(self):
        """Test unique() without an id uses the class name."""
        registrar = HtmlIdRegistrar()
        assert registrar.unique() == 'HtmlIdRegistrar1'
        assert registrar.unique() == 'HtmlIdRegistrar2'

    def test_global_instance_is_shared(self):
        """Test get_global_instance returns the same registrar every time."""
        assert HtmlIdRegistrar.get_global_instance() is HtmlIdRegistrar.get_global_instance()

    def test_set_global_instance(self):
        """Test the global registrar can be replaced."""
        registrar = HtmlIdRegistrar()
        HtmlIdRegistrar.set_global_instance(registrar)
        assert HtmlIdRegistrar.get_global_instance() is registrar

    def test_reset_global_instance(self):
        """Test setting None makes a new global registrar on next use."""
        previous = HtmlIdRegistrar.get_global_instance()
        previous.unique('a')
        HtmlIdRegistrar.set_global_instance(None)

        current = HtmlIdRegistrar.get_global_instance()

        assert current is not previous
        assert current.exists('a') is False
