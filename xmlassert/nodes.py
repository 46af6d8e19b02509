""" The in-memory representation of parsed XML elements that the comparison works on. """

from types import MappingProxyType
from typing import Iterator, Mapping, Sequence, Tuple, Union


__all__ = ['Element', 'ContentType']


class Element:
    """ An immutable XML element.

        :param name: The element's name as written in the source, including a namespace
                     prefix if there's one.
        :param attributes: A :term:`mapping` of attribute names to their values.
        :param content: A sequence that alternates between text segments and child
                        elements. It starts and ends with a text segment that may be
                        empty, hence it always has an odd length. An empty sequence is
                        taken as a single empty text segment.
    """
    __slots__ = ('_name', '_attributes', '_content')

    def __init__(self, name: str, attributes: Mapping[str, str] = None,
                 content: Sequence[Union[str, 'Element']] = ('',)) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError('An element name must be a non-empty string.')
        content = tuple(content) or ('',)
        _validate_content(content)
        self._name = name
        self._attributes = MappingProxyType(dict(attributes or {}))
        self._content = content

    @classmethod
    def build(cls, name: str, attributes: Mapping[str, str] = None,
              *nodes: Union[str, 'Element']) -> 'Element':
        """ Constructs an element from any mix of strings and elements. Adjacent
            strings are merged and the empty text segments between elements are
            inserted.

            >>> Element.build('p', None, 'foo', Element('br'), Element('br')).content
            ('foo', <Element br>, '', <Element br>, '')
        """
        content = ['']
        for node in nodes:
            if isinstance(node, str):
                content[-1] += node
            elif isinstance(node, Element):
                content.extend((node, ''))
            else:
                raise TypeError('Content nodes must be strings or elements, got {!r}.'
                                .format(node))
        return cls(name, attributes, content)

    @property
    def name(self) -> str:
        return self._name

    @property
    def attributes(self) -> Mapping[str, str]:
        """ A read-only view on the element's attributes. """
        return self._attributes

    @property
    def content(self) -> Tuple[Union[str, 'Element'], ...]:
        return self._content

    @property
    def children(self) -> Tuple['Element', ...]:
        """ The child elements, without the text segments. """
        return self._content[1::2]

    @property
    def texts(self) -> Tuple[str, ...]:
        """ The text segments, including empty ones. """
        return self._content[::2]

    def iter(self) -> Iterator['Element']:
        """ Yields this element and all descendant elements in document order. """
        yield self
        for child in self.children:
            yield from child.iter()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (self._name == other._name
                and self._attributes == other._attributes
                and self._content == other._content)

    def __hash__(self) -> int:
        return hash((self._name, frozenset(self._attributes.items()), self._content))

    def __repr__(self) -> str:
        return '<Element {}>'.format(self._name)


ContentType = Tuple[Union[str, Element], ...]


def _validate_content(content: Sequence) -> None:
    if not len(content) % 2:
        raise ValueError('Element content must alternate between text and elements and '
                         'start and end with text, got {} items.'.format(len(content)))
    for position, item in enumerate(content):
        expected_type = Element if position % 2 else str
        if not isinstance(item, expected_type):
            raise ValueError('Expected {} at content position {}, got {!r}.'
                             .format(expected_type.__name__, position, item))
