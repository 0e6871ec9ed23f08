# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for markup serialization functions."""

from markupsafe import Markup

from genro_fluenthtml.markup import (
    UNESCAPED,
    build_attributes_string,
    build_contents_string,
    build_html_element,
    flatten,
    flatten_attribute_value,
    flatten_attributes,
    get_attribute_quote_char,
)


class HtmlContent:
    """Object rendering its own html."""

    def __init__(self, content):
        self.content = content

    def __html__(self):
        return self.content


class NoStringValue:
    """Object without a string representation of its own."""


class TestBuildHtmlElement:
    """Tests for build_html_element."""

    def test_build_html_element(self):
        """Test attributes and multiple contents."""
        assert build_html_element('p', {'id': 'a', 'title': 't'}, ['a', 'b']) == \
            '<p id="a" title="t">\na\nb\n</p>'

    def test_single_quoted_attributes(self):
        """Test attribute values in single quotes."""
        assert build_html_element('p', {'title': 'text'}, [], attribute_quote_char="'") == \
            "<p title='text'></p>"

    def test_unsupported_quote_char(self):
        """Test an unsupported quote falls back to double quotes."""
        assert build_html_element('p', {'title': 'text'}, attribute_quote_char='`') == \
            '<p title="text"></p>'

    def test_quotes_in_attribute(self):
        """Test quotes in attribute values are escaped."""
        assert build_html_element('p', {'title': '"t\''}) == '<p title="&#34;t&#39;"></p>'

    def test_zero_values(self):
        """Test zero is rendered, both as number and as string."""
        assert build_html_element('p', {'title': 0, 'accesskey': '0'}, [0, '0']) == \
            '<p title="0" accesskey="0">\n0\n0\n</p>'

    def test_multilevel(self):
        """Test nested lists of attributes and contents are flattened."""
        assert build_html_element('p', [{'id': 'a'}, [{'title': 0}]], [['a'], [[0]]]) == \
            '<p id="a" title="0">\na\n0\n</p>'

    def test_booleans(self):
        """Test boolean attributes and conditional content tokens."""
        html = build_html_element(
            'textarea',
            {'name': 'a', 'title': 't', 'autofocus': True, 'disabled': False},
            ['a', {'b': True, 'c': False}],
        )
        assert html == '<textarea name="a" title="t" autofocus>\na\nb\n</textarea>'

    def test_callables(self):
        """Test producers for attributes and contents at every level."""
        html = build_html_element(
            'p',
            lambda: {'id': 'a', 'class': lambda: 'a', 'title': lambda: 0},
            lambda: ['text', lambda: 'a', lambda: 0],
        )
        assert html == '<p id="a" class="a" title="0">\ntext\na\n0\n</p>'

    def test_escaping_content(self):
        """Test string contents are escaped by default."""
        assert build_html_element('p', {}, '<br>') == '<p>&lt;br&gt;</p>'

    def test_not_escaping_content(self):
        """Test escaping can be turned off."""
        assert build_html_element('p', {}, '<br>', UNESCAPED) == '<p><br></p>'

    def test_html_content(self):
        """Test objects with __html__ are inserted as they are."""
        assert build_html_element('p', {}, HtmlContent('<br>')) == '<p><br></p>'
        assert build_html_element('p', {}, Markup('<br>')) == '<p><br></p>'

    def test_non_stringable_object(self):
        """Test objects without a string value are left out."""
        assert build_html_element('p', {'id': NoStringValue()}, NoStringValue()) == '<p></p>'

    def test_void_element(self):
        """Test void elements get no closing tag when empty."""
        assert build_html_element('br') == '<br>'
        assert build_html_element('input', {'type': 'text'}) == '<input type="text">'

    def test_void_element_with_content(self):
        """Test a void element with content still gets a closing tag."""
        assert build_html_element('br', None, 'x') == '<br>x</br>'

    def test_long_element_is_split(self):
        """Test long elements put contents on their own line."""
        text = 'x' * 80
        assert build_html_element('p', None, text) == f'<p>\n{text}\n</p>'

    def test_content_is_trimmed(self):
        """Test whitespace around each content piece is removed."""
        assert build_html_element('p', None, '  a  ') == '<p>a</p>'


class TestBuildContentsString:
    """Tests for build_contents_string."""

    def test_empty(self):
        """Test no contents give an empty string."""
        assert build_contents_string() == ''
        assert build_contents_string([None, False, True, '', '  ']) == ''

    def test_keyed_tokens(self):
        """Test keys replace truthy values and falsy values are dropped."""
        assert build_contents_string({'shown': 1, 'hidden': False, 'maybe': lambda: 'yes'}) == \
            'shown\nmaybe'

    def test_numbers(self):
        """Test numbers are converted to strings."""
        assert build_contents_string([1, 2.5]) == '1\n2.5'


class TestBuildAttributesString:
    """Tests for build_attributes_string."""

    def test_leading_space(self):
        """Test the string starts with a space when attributes are present."""
        assert build_attributes_string({'id': 'a'}) == ' id="a"'

    def test_no_attributes(self):
        """Test no attributes give an empty string."""
        assert build_attributes_string() == ''
        assert build_attributes_string({'id': None, 'title': False}) == ''

    def test_positional_names_are_boolean(self):
        """Test positional entries become boolean attributes."""
        assert build_attributes_string(['readonly', {'name': 'a'}]) == ' readonly name="a"'

    def test_list_values(self):
        """Test list values are joined, by space for class only."""
        assert build_attributes_string({'class': ['a', 'b'], 'accept': ['a', 'b']}) == \
            ' class="a b" accept="a,b"'


class TestFlatten:
    """Tests for flatten helpers."""

    def test_flatten(self):
        """Test nested containers are flattened in order with their keys."""
        assert flatten(['a', ['b', {'c': True}]], 'd') == \
            [(None, 'a'), (None, 'b'), ('c', True), (None, 'd')]

    def test_flatten_repeated_key(self):
        """Test a repeated key overwrites the item in its first position."""
        assert flatten([{'a': 1}, 'x', {'a': 2}]) == [('a', 2), (None, 'x')]

    def test_flatten_attributes(self):
        """Test positional attribute lists are merged."""
        assert flatten_attributes([{'type': 'text'}, [{'name': 'a'}], 'readonly', None]) == \
            {'type': 'text', 'name': 'a', 'readonly': True}

    def test_flatten_attribute_value(self):
        """Test conditional class tokens."""
        assert flatten_attribute_value('class', ['a', {'b': True, 'c': False}, None]) == 'a b'

    def test_flatten_attribute_value_scalar(self):
        """Test scalar values are returned unchanged."""
        assert flatten_attribute_value('title', 't') == 't'
        assert flatten_attribute_value('title', True) is True

    def test_get_attribute_quote_char(self):
        """Test only double and single quotes are accepted."""
        assert get_attribute_quote_char("'") == "'"
        assert get_attribute_quote_char('x') == '"'
