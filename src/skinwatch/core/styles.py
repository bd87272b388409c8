"""
Skin (style set) model and loader
"""

import re
import logging
from pathlib import Path
from typing import Any, Callable, List, Union
from dataclasses import dataclass, field, fields, replace

import yaml

from .errors import ConfigNotFound, ConfigParseError


logger = logging.getLogger(__name__)

DEFAULT_COLOR = 'default'

_NAMED_COLOR = re.compile(r'^[a-z]+$')
_HEX_COLOR = re.compile(r'^#(?:[0-9a-f]{3}|[0-9a-f]{6})$')


def normalize_color(value: Any) -> str:
    """Normalize a color value from a skin file.

    Accepts color names (``dodgerblue``), hex triplets (``#1e90ff``, ``#fff``)
    and ``default``. Short hex values are expanded to six digits.

    Raises:
        ValueError: if the value is not a recognizable color
    """
    if not isinstance(value, str):
        raise ValueError(f"color must be a string, got {type(value).__name__}")

    color = value.strip().lower()
    if not color:
        return DEFAULT_COLOR
    if _HEX_COLOR.match(color):
        if len(color) == 4:
            color = '#' + ''.join(c * 2 for c in color[1:])
        return color
    if _NAMED_COLOR.match(color):
        return color
    raise ValueError(f"invalid color {value!r}")


@dataclass
class Body:
    fg_color: str = 'cadetblue'
    bg_color: str = 'black'
    logo_color: str = 'orange'


@dataclass
class Border:
    fg_color: str = 'dodgerblue'
    focus_color: str = 'lightskyblue'


@dataclass
class Status:
    """Resource status colors, the source of the render palette"""
    new_color: str = 'lightskyblue'
    modify_color: str = 'greenyellow'
    add_color: str = 'dodgerblue'
    pending_color: str = 'darkorange'
    error_color: str = 'orangered'
    highlight_color: str = 'aqua'
    kill_color: str = 'mediumpurple'
    completed_color: str = 'lightslategray'


@dataclass
class Frame:
    border: Border = field(default_factory=Border)
    status: Status = field(default_factory=Status)


@dataclass
class Style:
    body: Body = field(default_factory=Body)
    frame: Frame = field(default_factory=Frame)


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _merge_section(section: Any, data: Any, where: str) -> Any:
    """Return a copy of ``section`` updated from the camelCase mapping ``data``"""
    if data is None:
        return section
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be a mapping")

    updates = {}
    for f in fields(section):
        key = _camel(f.name)
        if key not in data:
            continue
        current = getattr(section, f.name)
        if isinstance(current, str):
            try:
                updates[f.name] = normalize_color(data[key])
            except ValueError as e:
                raise ValueError(f"{where}.{key}: {e}") from e
        else:
            updates[f.name] = _merge_section(current, data[key], f"{where}.{key}")
    return replace(section, **updates)


StyleListener = Callable[['StyleSet'], None]


class StyleSet:
    """Skin settings loaded from a YAML file.

    A load either replaces the whole style or leaves it untouched, so a
    malformed skin never leaves half-applied colors behind.
    """

    ROOT_KEY = 'skinwatch'

    def __init__(self):
        self.style = Style()
        self._listeners: List[StyleListener] = []

    def reset(self):
        """Restore the built-in style"""
        self.style = Style()

    def default_skin(self):
        """Switch to the built-in skin"""
        self.style = Style()

    def body(self) -> Body:
        return self.style.body

    def frame(self) -> Frame:
        return self.style.frame

    def load(self, path: Union[str, Path]):
        """Load a skin file on top of the built-in style.

        Raises:
            ConfigNotFound: if ``path`` does not exist
            ConfigParseError: if the file is not a valid skin
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigNotFound(path, 'no such file') from e
        except yaml.YAMLError as e:
            raise ConfigParseError(path, f"YAML parse error: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(path, str(e)) from e

        self.style = self._parse(path, data)

    @classmethod
    def _parse(cls, path: Path, data: Any) -> Style:
        # An empty skin file selects the built-in style
        if data is None:
            return Style()
        if not isinstance(data, dict):
            raise ConfigParseError(path, 'skin must be a mapping')
        if cls.ROOT_KEY in data:
            data = data[cls.ROOT_KEY]

        try:
            return _merge_section(Style(), data, cls.ROOT_KEY)
        except ValueError as e:
            raise ConfigParseError(path, str(e)) from e

    def add_listener(self, listener: StyleListener):
        self._listeners.append(listener)

    def update(self):
        """Notify listeners that the style changed"""
        for listener in list(self._listeners):
            listener(self)


def new_styles() -> StyleSet:
    """Create a style set holding the built-in skin"""
    return StyleSet()
