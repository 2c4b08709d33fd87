"""Extraction of Go doc comments from the leading comments of RPC methods.

A method comment in the proto files looks like

    /* lncli: `getinfo`
    GetInfo returns general information concerning the lightning node.
    */

The first line is metadata for other tools and is dropped; the rest is turned into a `//` comment block whose
first word is the method name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from falafel.schema import SchemaFile

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "// "
MIN_COMMENT_LENGTH = 4

# Spaces that end a line, right before the comment prefix of the next one.
_TRAILING_SPACES = re.compile(r" +\n//")

DocCommentIndex = dict[str, str]


def extract_comment(raw: str) -> tuple[str, str] | None:
    """Turn a raw leading comment into a method name and its formatted doc comment.

    Args:
        raw (str): The leading comment as found in the source code info.

    Returns:
        tuple[str, str] | None: The method name and the comment block, or None if there is nothing to document.
    """
    _, newline, text = raw.partition("\n")
    if not newline or len(text) < MIN_COMMENT_LENGTH:
        return None

    method = text.split(" ", 1)[0]

    text = text.replace("\n", f"\n{COMMENT_PREFIX}")
    text = _TRAILING_SPACES.sub("\n//", text)

    # The last four characters are the newline and prefix that follow the closing line.
    return method, COMMENT_PREFIX + text[:-4]


def build_doc_index(schema_files: Iterable[SchemaFile]) -> DocCommentIndex:
    """Collect the doc comments of all methods in the given files.

    Args:
        schema_files (Iterable[SchemaFile]): The files to scan.

    Returns:
        DocCommentIndex: Method name to doc comment. Later files win on duplicate names.
    """
    index: DocCommentIndex = {}
    for schema_file in schema_files:
        for location in schema_file.comments:
            extracted = extract_comment(location.leading_comments)
            if extracted is None:
                logger.debug("Skipping comment without content at %s in '%s'.", location.path, schema_file.name)
                continue

            method, comment = extracted
            index[method] = comment

    return index
