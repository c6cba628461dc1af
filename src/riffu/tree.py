"""Materialized chunk trees: read a whole hierarchy, search it, print it."""

import io
import sys
from dataclasses import dataclass, field
from typing import IO, Any, Dict, Iterator, List, Optional, Protocol, Union

from parse import parse

from .builder import Node, leaf, typed_container, untyped_container
from .fourcc import FourCC
from .model import Classification
from .settings import ReadSetting


class ChunkLike(Protocol):
    """Common surface of eager and lazy chunks."""

    setting: ReadSetting
    offset: int

    @property
    def classification(self) -> Classification:
        ...

    def id(self) -> FourCC:
        ...

    def payload_len(self) -> int:
        ...

    def chunk_type(self) -> FourCC:
        ...

    def raw_content(self) -> Union[bytes, memoryview]:
        ...

    def children(self) -> Iterator[Any]:
        ...


@dataclass
class Element(object):
    """Materialized chunk

    etag: chunk id

    classification: typed container, untyped container or leaf

    form_type: form type of typed containers

    data: content of leaf chunks, or raw payload of containers read past max_depth

    children: contained elements

    attribs: helper attributes (offset, size)
    """

    etag: FourCC
    classification: Classification
    form_type: Optional[FourCC] = None
    data: Optional[bytes] = field(default=None, repr=False)
    children: List['Element'] = field(default_factory=list)
    attribs: Dict[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        # latin-1 maps every byte, ids need not be UTF-8
        return self.etag.as_bytes().decode('latin-1')

    @property
    def expanded(self) -> bool:
        return not (self.classification.is_container and self.data is not None)

    def __iter__(self) -> Iterator['Element']:
        return iter(self.children)

    def to_node(self) -> Node:
        """Convert element back to a builder node."""
        if not self.expanded:
            raise ValueError(f'{self.tag} was read past max_depth, children are missing')
        if self.classification is Classification.TYPED_CONTAINER:
            assert self.form_type is not None
            return typed_container(
                self.etag, self.form_type, [c.to_node() for c in self.children],
            )
        if self.classification is Classification.UNTYPED_CONTAINER:
            return untyped_container(self.etag, [c.to_node() for c in self.children])
        return leaf(self.etag, self.data or b'')


def read_tree(
    chunk: ChunkLike,
    setting: Optional[ReadSetting] = None,
    level: int = 0,
) -> Element:
    """Read chunk and all of its descendants, the first error propagates."""
    cfg = setting or chunk.setting
    classification = chunk.classification
    elem = Element(
        chunk.id(),
        classification,
        attribs={'offset': chunk.offset, 'size': chunk.payload_len()},
    )
    if classification is Classification.TYPED_CONTAINER:
        elem.form_type = chunk.chunk_type()
    if not classification.is_container:
        elem.data = bytes(chunk.raw_content())
    elif cfg.max_depth is not None and level >= cfg.max_depth:
        elem.data = bytes(chunk.raw_content())
    else:
        elem.children = [read_tree(c, cfg, level + 1) for c in chunk.children()]
    return elem


def _latin1(etag: FourCC) -> str:
    return etag.as_bytes().decode('latin-1')


def _names(element: Element) -> Iterator[str]:
    yield element.tag
    if element.form_type is not None:
        yield f'{element.tag}:{_latin1(element.form_type)}'


def findall(pattern: str, root: Optional[Element]) -> Iterator[Element]:
    """Direct children whose tag, or `tag:form_type` for typed containers, match."""
    if root is None:
        return
    for child in root.children:
        if any(parse(pattern, name, evaluate_result=False) for name in _names(child)):
            yield child


def find(pattern: str, root: Optional[Element]) -> Optional[Element]:
    return next(findall(pattern, root), None)


def findpath(path: str, root: Optional[Element]) -> Optional[Element]:
    elem = root
    for step in path.split('/'):
        if step in ('', '.'):
            continue
        elem = find(step, elem)
    return elem


def _describe(element: Element) -> str:
    fields = [element.tag]
    form_type = element.form_type
    if element.classification is Classification.TYPED_CONTAINER and form_type is not None:
        fields.append(f'type="{_latin1(form_type)}"')
    fields.extend(f'{key}="{value}"' for key, value in element.attribs.items() if value is not None)
    return ' '.join(fields)


def iter_lines(element: Element, level: int = 0) -> Iterator[str]:
    indent = '    ' * level
    if not element.children:
        yield f'{indent}<{_describe(element)} />'
        return
    yield f'{indent}<{_describe(element)}>'
    for child in element.children:
        yield from iter_lines(child, level + 1)
    yield f'{indent}</{element.tag}>'


def render(element: Optional[Element], stream: IO[str] = sys.stdout) -> None:
    if element is None:
        return
    for line in iter_lines(element):
        print(line, file=stream)


def renders(element: Optional[Element]) -> str:
    with io.StringIO() as stream:
        render(element, stream=stream)
        return stream.getvalue()
