"""
Skin resolution: find the effective skin file among the candidate names
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import ConfigNotFound, ConfigParseError
from .styles import StyleSet
from ..utils import path_utils


logger = logging.getLogger(__name__)

DEFAULT_SKIN = 'skin'
SKIN_EXTENSIONS: Tuple[str, ...] = ('yaml', 'yml')

# (name, extension) pairs, tried in order
SkinCandidate = Tuple[str, str]

# A resolution step yields the skin names it proposes, most specific first
CandidateSource = Callable[['SkinRequest'], Iterable[str]]


class SkinRequest:
    """Inputs of one resolution"""

    def __init__(self, context: str = '', configured_skin: str = '', manual_skin: str = ''):
        self.context = context or ''
        self.configured_skin = configured_skin or ''
        self.manual_skin = manual_skin or ''


def manual_skin(request: SkinRequest) -> Iterator[str]:
    """Skin explicitly requested by the caller"""
    if request.manual_skin:
        yield request.manual_skin


def context_skin(request: SkinRequest) -> Iterator[str]:
    """Per cluster context override, ``<context>_skin``"""
    if request.context:
        yield f"{request.context}_skin"


def configured_skin(request: SkinRequest) -> Iterator[str]:
    """Skin named in the persisted settings"""
    if request.configured_skin:
        yield request.configured_skin


def default_skin_source(default_name: str = DEFAULT_SKIN) -> CandidateSource:
    """The conventional skin file, always tried last"""
    def source(request: SkinRequest) -> Iterator[str]:
        yield default_name
    return source


def expand_extensions(name: str, extensions: Sequence[str]) -> List[SkinCandidate]:
    """Every ``(name, extension)`` pair to try for one skin name.

    A name already ending in a supported extension is tried as written first,
    then with each extension appended.
    """
    candidates: List[SkinCandidate] = []
    stem, dot, suffix = name.rpartition('.')
    if dot and stem and suffix in extensions:
        candidates.append((stem, suffix))
    for extension in extensions:
        if (name, extension) not in candidates:
            candidates.append((name, extension))
    return candidates


class SkinResolver:
    """Computes the single effective skin file.

    Sources are tried in priority order and the first skin that loads wins.
    For each name every supported extension is tried before moving on. A
    missing file and a malformed file both just move on to the next
    candidate.
    """

    def __init__(self, home: Path, extensions: Sequence[str] = SKIN_EXTENSIONS,
                 default_name: str = DEFAULT_SKIN,
                 sources: Optional[List[CandidateSource]] = None):
        self.home = Path(home)
        self.extensions = tuple(ext.lstrip('.') for ext in extensions) or SKIN_EXTENSIONS
        if sources is None:
            sources = [manual_skin, context_skin, configured_skin,
                       default_skin_source(default_name)]
        self.sources = sources

    def candidates(self, request: SkinRequest) -> Iterator[Path]:
        """Skin file paths in the order they are attempted"""
        for source in self.sources:
            for name in source(request):
                for stem, extension in expand_extensions(name, self.extensions):
                    yield path_utils.with_extension(self.home, stem, extension)

    def resolve(self, styles: StyleSet, context: str = '', configured: str = '',
                manual: str = '') -> Optional[Path]:
        """Load the first valid skin into ``styles``.

        Returns:
            Path of the loaded skin file, or None when no candidate loaded
            and ``styles`` is left untouched
        """
        request = SkinRequest(context, configured, manual)
        for path in self.candidates(request):
            if self._load(styles, path):
                return path
        return None

    def _load(self, styles: StyleSet, path: Path) -> bool:
        try:
            styles.load(path)
        except ConfigNotFound:
            logger.warning("No skin file found -- %s", path)
            return False
        except ConfigParseError as e:
            logger.error("Failed to parse skin file -- %s. %s.", path, e.detail)
            return False
        logger.debug("Loaded skin file %s", path)
        return True
