"""
Theme management for typo's terminal renderer.
Maps syntax token classes and markdown elements to Rich styles, and loads
optional themes from JSON files.
"""
import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from rich.theme import Theme as RichTheme

from .highlighter import TokenType

logger = logging.getLogger(__name__)


@dataclass
class SyntaxColors:
    """Code highlighting colors, one per token class.

    Defaults follow the VSCode Dark+ palette.
    """
    keyword: str = "#569cd6"
    string: str = "#ce9178"
    comment: str = "#6a9955"
    number: str = "#b5cea8"
    type: str = "#4ec9b0"
    function: str = "#dcdcaa"
    parameter: str = "#9cdcfe"
    punctuation: str = "grey50"
    plain: str = "#d4d4d4"
    background: str = "#1e1e23"
    gutter: str = "grey35"


@dataclass
class MarkdownStyles:
    """Styles for markdown blocks and inline runs."""
    heading1: str = "bold white"
    heading2: str = "bold grey85"
    heading3: str = "bold grey70"
    text: str = "grey74"
    bold: str = "bold grey82"
    italic: str = "italic grey74"
    code: str = "#d63384"
    link: str = "underline #3b8eea"
    bullet: str = "grey50"
    marker: str = "grey50"
    code_border: str = "grey30"
    code_title: str = "grey50"


@dataclass
class UIStyles:
    """Styles for command output."""
    title: str = "bold #00d7d7"
    success: str = "bold #00ff00"
    warning: str = "bold #ffff00"
    error: str = "bold #ff0000"
    muted: str = "#666666"
    value: str = "white"


@dataclass
class Theme:
    """Complete theme definition."""
    name: str = "default"
    description: str = "Dark theme with VSCode Dark+ syntax colors"
    syntax: SyntaxColors = field(default_factory=SyntaxColors)
    markdown: MarkdownStyles = field(default_factory=MarkdownStyles)
    ui: UIStyles = field(default_factory=UIStyles)

    def style_for(self, token_type: TokenType) -> str:
        """Get the style for a syntax token class."""
        return getattr(self.syntax, token_type.value)

    def to_rich_theme(self) -> RichTheme:
        """Convert to Rich Theme object."""
        style_dict = {}
        for token_type in TokenType:
            style_dict[f"syntax.{token_type.value}"] = self.style_for(token_type)
        style_dict["syntax.gutter"] = self.syntax.gutter
        for item in fields(self.markdown):
            style_dict[f"md.{item.name}"] = getattr(self.markdown, item.name)
        for item in fields(self.ui):
            style_dict[f"ui.{item.name}"] = getattr(self.ui, item.name)
        return RichTheme(style_dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Theme':
        """Create Theme from dictionary."""
        return cls(
            name=data.get('name', 'custom'),
            description=data.get('description', ''),
            syntax=SyntaxColors(**data.get('syntax', {})),
            markdown=MarkdownStyles(**data.get('markdown', {})),
            ui=UIStyles(**data.get('ui', {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Theme to dictionary."""
        return asdict(self)


LIGHT_THEME = Theme(
    name="light",
    description="Light theme with VSCode Light+ syntax colors",
    syntax=SyntaxColors(
        keyword="#0000ff",
        string="#a31515",
        comment="#008000",
        number="#098658",
        type="#267f99",
        function="#795e26",
        parameter="#001080",
        punctuation="grey46",
        plain="#000000",
        background="#ffffff",
        gutter="grey62",
    ),
    markdown=MarkdownStyles(
        heading1="bold black",
        heading2="bold grey23",
        heading3="bold grey30",
        text="#555555",
        bold="bold #444444",
        italic="italic #555555",
        code="#d63384",
        link="underline #0066cc",
        bullet="grey50",
        marker="grey50",
        code_border="grey70",
        code_title="grey46",
    ),
)


class ThemeManager:
    """
    Manages loading and switching themes.

    Built-in themes are always available; additional themes are loaded
    from ``*.json`` files in the themes directory.
    """

    def __init__(self, themes_dir: Optional[Path] = None) -> None:
        """
        Initialize the theme manager.

        Args:
            themes_dir: Directory with custom theme files, if any
        """
        self._themes: Dict[str, Theme] = {}
        self._current_theme: Theme = Theme()
        self._themes_dir = themes_dir
        self._load_builtin_themes()
        self._load_custom_themes()

    def _load_builtin_themes(self) -> None:
        """Load built-in themes."""
        self._themes['default'] = Theme()
        self._themes['light'] = LIGHT_THEME

    def _load_custom_themes(self) -> None:
        """Load custom themes from JSON files."""
        if self._themes_dir is None or not self._themes_dir.is_dir():
            return

        for theme_file in sorted(self._themes_dir.glob("*.json")):
            try:
                with open(theme_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                theme = Theme.from_dict(data)
                self._themes[theme.name] = theme
                logger.debug(f"Loaded theme '{theme.name}' from {theme_file}")
            except (OSError, json.JSONDecodeError, TypeError, AttributeError) as e:
                logger.warning(f"Failed to load theme {theme_file}: {e}")

    @property
    def current_theme(self) -> Theme:
        """Get the current active theme."""
        return self._current_theme

    @property
    def available_themes(self) -> list[str]:
        """Get list of available theme names."""
        return list(self._themes.keys())

    def get_theme(self, name: str) -> Optional[Theme]:
        """Get a theme by name."""
        return self._themes.get(name)

    def set_theme(self, name: str) -> bool:
        """
        Set the active theme.

        Args:
            name: Name of the theme to activate

        Returns:
            True if theme was set, False if not found
        """
        if name in self._themes:
            self._current_theme = self._themes[name]
            return True
        logger.warning(f"Theme '{name}' not found, keeping '{self._current_theme.name}'")
        return False

    def get_rich_theme(self) -> RichTheme:
        """Get the current theme as a Rich Theme object."""
        return self._current_theme.to_rich_theme()
