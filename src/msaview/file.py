# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = ["TextFile", "InvalidFileError", "wrap_string"]

import abc
import io
from contextlib import contextmanager
from os import PathLike


class InvalidFileError(Exception):
    """
    Indicates that a file cannot be interpreted in the assumed format
    or that it lacks the data required for the requested operation.
    """

    pass


class TextFile(metaclass=abc.ABCMeta):
    """
    Common base of the line oriented file formats.

    An instance holds the file content as list of lines without line
    terminators.
    A new instance represents an empty file, which can be filled via
    the methods of the respective subclass.
    An existing file is loaded with :meth:`read()` from a path or an
    open text stream, or with :meth:`from_text()` from the raw file
    content, which is the usual input of the viewer.

    Attributes
    ----------
    lines : list of str
        The lines of the file.
        Subclasses keep an index into these lines, hence they should
        not be modified directly.
    """

    def __init__(self):
        self.lines = []

    @classmethod
    def read(cls, file, *args, **kwargs):
        """
        Load a file.

        Parameters
        ----------
        file : file-like object or str or PathLike
            A path or a stream opened in text mode.
        *args, **kwargs
            Passed to the constructor of the subclass.

        Returns
        -------
        file_object : TextFile
            The instance representing the file content.
        """
        with _text_stream(file, "r") as stream:
            content = stream.read()
        file_object = cls(*args, **kwargs)
        file_object.lines = content.splitlines()
        file_object._parse()
        return file_object

    @classmethod
    def from_text(cls, text, *args, **kwargs):
        """
        Load a file from its content.

        Parameters
        ----------
        text : str
            The complete file content.
        *args, **kwargs
            Passed to :meth:`read()`.

        Returns
        -------
        file_object : TextFile
            The instance representing the file content.
        """
        return cls.read(io.StringIO(text), *args, **kwargs)

    @abc.abstractmethod
    def _parse(self):
        """
        Build the internal state of the subclass from :attr:`lines`.
        """
        pass

    def write(self, file):
        """
        Save the lines of this instance.

        Parameters
        ----------
        file : file-like object or str or PathLike
            A path or a stream opened in text mode.
        """
        with _text_stream(file, "w") as stream:
            stream.write(str(self) + "\n")

    def __str__(self):
        return "\n".join(self.lines)


def wrap_string(text, width):
    """
    Split a string into chunks of fixed length.

    In contrast to :func:`textwrap.wrap()`, word boundaries and
    whitespace are not taken into account.

    Parameters
    ----------
    text : str
        The string to be split.
    width : int
        The length of each chunk.
        The last chunk may be shorter.

    Returns
    -------
    lines : list of str
        The chunks.

    Examples
    --------

    >>> print(wrap_string("ACDEFGHIK", 4))
    ['ACDE', 'FGHI', 'K']
    """
    return [text[i : i + width] for i in range(0, len(text), width)]


@contextmanager
def _text_stream(file, mode):
    if isinstance(file, (str, bytes, PathLike)):
        with open(file, mode) as stream:
            yield stream
        return
    # 'TemporaryFile' and similar wrappers expose the stream as 'file'
    stream = file.file if hasattr(file, "file") else file
    if not isinstance(stream, io.TextIOBase):
        raise TypeError("A file opened in text mode is required")
    yield file
