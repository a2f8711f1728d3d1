"""Asset name normalization.

Release assets usually embed the release version in their file name, e.g.
``tool_1.4.2_linux_amd64.tar.gz``. Stripping that version gives the logical
identity of the binary (``tool_linux_amd64.tar.gz``) so downloads of the same
artifact line up across releases.

Grammar::

    name           := prefix [version-suffix] rest
    version-suffix := "_" digits "." digits "." digits

Only the first version suffix is recognized. A name carrying a second one
keeps it.
"""

import re
from typing import NamedTuple, Optional

VERSION_SUFFIX_RE = re.compile(r"_(?P<version>[0-9]+\.[0-9]+\.[0-9]+)")


class AssetIdentity(NamedTuple):
    identity: str
    version: Optional[str]


def parse_asset_identity(name: str) -> AssetIdentity:
    match = VERSION_SUFFIX_RE.search(name)
    if match is None:
        return AssetIdentity(identity=name, version=None)
    identity = name[: match.start()] + name[match.end():]
    return AssetIdentity(identity=identity, version=match.group("version"))


def normalize_asset_name(name: str) -> str:
    return parse_asset_identity(name).identity
