import os
from typing import BinaryIO, Union

from .errors import RiffIOError

PathLike = Union[str, 'os.PathLike[str]']


def read_file(path: PathLike) -> bytes:
    try:
        with open(path, 'rb') as res:
            return res.read()
    except OSError as exc:
        raise RiffIOError(0, 0, exc, path=os.fspath(path)) from exc


def open_file(path: PathLike) -> BinaryIO:
    # buffered, caller owns the handle
    try:
        return open(path, 'rb')
    except OSError as exc:
        raise RiffIOError(0, 0, exc, path=os.fspath(path)) from exc


def write_file(path: PathLike, data: bytes) -> int:
    try:
        with open(path, 'wb') as res:
            return res.write(data)
    except OSError as exc:
        raise RiffIOError(0, len(data), exc, path=os.fspath(path)) from exc
