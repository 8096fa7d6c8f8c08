"""
PageTemplater - Static HTML shells per album and per category, plus the
viewer's static files and serve config.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, Template, TemplateError

from .album import Album
from .gallery_config import GalleryConfig

_jinja_env = Environment(autoescape=True)

SHELL_FILENAME = 'shell.html'
STATIC_FILES = ('app.js', 'style.css')

DEFAULT_SHELL = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<meta name="description" content="{{ description }}">
<meta property="og:title" content="{{ title }}">
<meta property="og:description" content="{{ description }}">
<link rel="stylesheet" href="{{ prefix }}style.css">
</head>
<body>
<nav class="navbar">
<a class="navbar-brand" href="{{ prefix }}categories.html">{{ site_name }}</a>
<ul id="nav-menu"></ul>
</nav>
<main id="main-content" class="container">
<a id="back-link" href="{{ prefix }}categories.html">&larr;</a>
<h1 id="{{ heading_id }}">{{ heading }}</h1>
<noscript><p>{{ description }}</p></noscript>
<div id="{{ container_id }}"></div>
</main>
<script>window.initialContext = {{ context|tojson }};</script>
<script src="{{ prefix }}app.js"></script>
</body>
</html>
"""


def _is_safe_filename(name: str) -> bool:
    return bool(name) and name not in ('.', '..') and '/' not in name and '\\' not in name


class PageTemplater:
    """
    Renders the shared page shell once per album and once per category.

    The shell receives title, description, heading, heading_id,
    container_id, site_name, prefix and a JSON-serializable context. The
    context is published as window.initialContext; the viewer dispatches
    on its type and id, so crawlers and link previews see real metadata
    and the viewer renders without query parameters.
    """

    def __init__(
        self,
        source_root: Path,
        output_dir: Path,
        config: GalleryConfig,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize page templater.

        Args:
            source_root: Source tree root (pages/, assets/ and statics live here)
            output_dir: Directory pages are written into
            config: Gallery config for branding
            logger: Optional logger instance
        """
        self.source_root = Path(source_root)
        self.output_dir = Path(output_dir)
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.template = self._load_template()

    def _load_template(self) -> Template:
        """Compile pages/shell.html when usable, otherwise the built-in shell."""
        shell = self.source_root / 'pages' / SHELL_FILENAME
        if shell.is_file():
            try:
                template = _jinja_env.from_string(shell.read_text(encoding='utf-8'))
            except (TemplateError, UnicodeDecodeError) as e:
                self.logger.error(f"Unusable page shell {shell}, using built-in shell: {e}")
            else:
                self.logger.debug(f"Using page shell {shell}")
                return template
        return _jinja_env.from_string(DEFAULT_SHELL)

    def _page_title(self, name: str) -> str:
        if self.config.project_name:
            return f"{name} | {self.config.project_name}"
        return name

    def _write(self, target: Path, **values) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        html = self.template.render(
            prefix='../',
            site_name=self.config.project_name or '',
            **values
        )
        target.write_text(html, encoding='utf-8')

    def render_album_pages(self, albums: List[Album]) -> List[Path]:
        """Write albums/<id>.html for each album."""
        written = []
        for album in albums:
            if not _is_safe_filename(album.id):
                self.logger.warning(f"Skipping page for album with unusable id: {album.id!r}")
                continue
            count = len(album.images)
            target = self.output_dir / 'albums' / f"{album.id}.html"
            self._write(
                target,
                title=self._page_title(album.title),
                description=f"{album.title}: {count} images",
                heading=album.title,
                heading_id='album-title',
                container_id='photos',
                context={
                    'type': 'album',
                    'id': album.id,
                    'title': album.title,
                    'categories': album.categories,
                    'cover': album.cover,
                    'locked': album.locked,
                    'imageCount': count,
                },
            )
            written.append(target)
        self.logger.info(f"Rendered {len(written)} album pages")
        return written

    def render_category_pages(
        self,
        categories: Dict[str, Optional[str]],
        albums: List[Album]
    ) -> List[Path]:
        """Write category/<name>.html for each category."""
        written = []
        for name, cover in categories.items():
            if not _is_safe_filename(name):
                self.logger.warning(f"Skipping page for category with unusable name: {name!r}")
                continue
            members = [album.id for album in albums if name in album.categories]
            target = self.output_dir / 'category' / f"{name}.html"
            self._write(
                target,
                title=self._page_title(name),
                description=f"{name}: {len(members)} albums",
                heading=name,
                heading_id='category-title',
                container_id='albums',
                context={
                    'type': 'category',
                    'id': name,
                    'cover': cover,
                    'albums': members,
                },
            )
            written.append(target)
        self.logger.info(f"Rendered {len(written)} category pages")
        return written

    def write_serve_config(self) -> Path:
        """Write serve.json turning off clean URLs so query strings survive redirects."""
        target = self.output_dir / 'serve.json'
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({'cleanUrls': False}, indent=2), encoding='utf-8')
        self.logger.info(f"Generated {target.name}")
        return target

    def copy_static_files(self) -> List[Path]:
        """
        Copy the viewer's files into the output directory.

        Copies app.js and style.css from the source root, every HTML page
        in pages/ except the shell, and every file in assets/. Missing
        sources are skipped.
        """
        copied = []
        self.output_dir.mkdir(parents=True, exist_ok=True)

        for name in STATIC_FILES:
            src = self.source_root / name
            if src.is_file():
                copied.append(Path(shutil.copy2(src, self.output_dir / name)))

        pages_dir = self.source_root / 'pages'
        if pages_dir.is_dir():
            for src in sorted(pages_dir.glob('*.html')):
                if src.name != SHELL_FILENAME and src.is_file():
                    copied.append(Path(shutil.copy2(src, self.output_dir / src.name)))

        assets_dir = self.source_root / 'assets'
        if assets_dir.is_dir():
            target_dir = self.output_dir / 'assets'
            target_dir.mkdir(parents=True, exist_ok=True)
            for src in sorted(assets_dir.iterdir()):
                if src.is_file():
                    copied.append(Path(shutil.copy2(src, target_dir / src.name)))

        self.logger.info(f"Copied {len(copied)} static files to {self.output_dir}")
        return copied
