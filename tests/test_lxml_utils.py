from lxml import etree
from pytest import raises

from xmlassert import ParseError
from xmlassert.lxml_utils import element_from_lxml, parse
from xmlassert.nodes import Element


def test_parse_content():
    root = parse('<foo a="1">text<bar/>tail<baz>inner</baz></foo>')
    assert root.name == 'foo'
    assert dict(root.attributes) == {'a': '1'}
    assert root.texts == ('text', 'tail', '')
    bar, baz = root.children
    assert bar == Element('bar')
    assert baz.content == ('inner',)


def test_self_closing_tags_are_irrelevant():
    assert parse('<foo><bar/></foo>') == parse('<foo><bar></bar></foo>')


def test_comments_and_processing_instructions_are_ignored():
    root = parse('<?xml version="1.0"?><!-- top --><p>foo<!-- a comment -->bar'
                 '<?target data?>baz<br/></p>')
    assert root.content == ('foobarbaz', Element('br'), '')


def test_entities():
    root = parse('<p a="&quot;">&lt;&amp;&gt;&apos;&#65;&#x42;</p>')
    assert root.attributes['a'] == '"'
    assert root.content == ("<&>'AB",)


def test_encoding_declaration_in_strings():
    root = parse('<?xml version="1.0" encoding="latin-1"?><p>ä</p>')
    assert root.content == ('ä',)


def test_encoding_declaration_in_bytes():
    root = parse('<?xml version="1.0" encoding="ISO-8859-1"?><p>ä</p>'.encode('latin-1'))
    assert root.content == ('ä',)


def test_namespace_prefixes_are_kept():
    fred = parse('<foo:fred xmlns:foo="http://example.org/fred" foo:a="1"/>')
    assert fred.name == 'foo:fred'
    assert dict(fred.attributes) == {'xmlns:foo': 'http://example.org/fred',
                                     'foo:a': '1'}
    assert fred != parse('<bar:fred xmlns:bar="http://example.org/fred" bar:a="1"/>')


def test_namespace_declarations_are_attributes_of_the_declaring_element():
    root = parse('<root xmlns="http://example.org/"><child xml:lang="en"/></root>')
    assert root.name == 'root'
    assert dict(root.attributes) == {'xmlns': 'http://example.org/'}
    child = root.children[0]
    assert child.name == 'child'
    assert dict(child.attributes) == {'xml:lang': 'en'}


def test_parse_errors():
    for document in ('<foo>', '<foo></bar>', 'text', '<foo>&undefined;</foo>',
                     '<a/><b/>'):
        with raises(ParseError) as excinfo:
            parse(document)
        assert excinfo.value.message


def test_element_from_lxml():
    tree = etree.ElementTree(etree.fromstring('<root><!--x--><a>1</a>2</root>'))
    assert element_from_lxml(tree) == Element.build('root', None, Element.build('a', None, '1'),
                                                    '2')
    with raises(TypeError):
        element_from_lxml(etree.Comment('x'))


def test_undeclared_prefixes_are_name_text():
    root = parse('<a:foo b:x="1"><a:bar/>text</a:foo>')
    assert root.name == 'a:foo'
    assert dict(root.attributes) == {'b:x': '1'}
    assert root.content == ('', Element('a:bar'), 'text')


def test_attribute_prefixes_are_kept_as_written():
    a = parse('<r xmlns:a="u" xmlns:b="u" a:x="1"/>')
    b = parse('<r xmlns:a="u" xmlns:b="u" b:x="1"/>')
    assert dict(b.attributes) == {'xmlns:a': 'u', 'xmlns:b': 'u', 'b:x': '1'}
    assert dict(a.attributes) == {'xmlns:a': 'u', 'xmlns:b': 'u', 'a:x': '1'}
    assert a != b


def test_declared_entities_are_not_supported():
    with raises(ParseError) as excinfo:
        parse('<!DOCTYPE r [<!ENTITY e "hi">]><r>&e;</r>')
    assert '&e;' in excinfo.value.message
