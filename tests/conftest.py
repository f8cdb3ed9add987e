"""Pytest configuration and shared fixtures.

Provides small Angular-style projects on disk, an in-memory workspace and a
hand-driven change source for exercising the index deterministically.
"""

import os
import sys
import tempfile
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from template_navigator.config import NavigatorConfig, reset_config
from template_navigator.indexing.models import FileChangeEvent
from template_navigator.monitoring import ChangeSource
from template_navigator.utils import FileFilter
from template_navigator.workspace import Workspace


HERO_CARD_COMPONENT = '''
import { Component, Input } from '@angular/core';

@Component({
  selector: 'app-hero-card',
  template: `<h2>{{ hero.name }}</h2>`,
})
export class HeroCardComponent {
  @Input() hero: Hero;
}
'''

APP_COMPONENT = '''
import { Component } from '@angular/core';

@Component({
  selector: "app-root",
  templateUrl: './app.component.html',
  styleUrls: ['./app.component.scss'],
})
export class AppComponent {
  isActive = true;
}
'''

HIGHLIGHT_DIRECTIVE = '''
import { Directive, ElementRef } from '@angular/core';

@Directive({
  selector: '[appHighlight], [appHighlightAlt]',
})
export class HighlightDirective {
  constructor(private el: ElementRef) {}
}
'''

CURRENCY_PIPE = '''
import { Pipe, PipeTransform } from '@angular/core';

@Pipe({ name: 'currencyCode' })
export class CurrencyCodePipe implements PipeTransform {
  transform(value: number): string {
    return `${value} EUR`;
  }
}
'''

APP_TEMPLATE_LINES = [
    '<app-hero-card [hero]="hero"></app-hero-card>',
    '<div class="container highlighted">',
    '  <p>{{ hero.price | currencyCode }}</p>',
    '  <span [class.active]="isActive">Active</span>',
    '  <ul [ngClass]="[\'list\', \'compact\']"></ul>',
    '  <currencyCode></currencyCode>',
    '  <unknown-thing></unknown-thing>',
    '</div>',
    '<app-hero-card/>',
]

APP_STYLES = '''.container {
  display: flex;
}

.highlighted { color: gold; }
.active {
  font-weight: bold;
  &:hover { color: red; }
}
.list { margin: 0; }
.compact { padding: 0; }
'''


def write_angular_project(project_path: Path) -> Path:
    files = {
        "src/app/app.component.ts": APP_COMPONENT,
        "src/app/app.component.html": "\n".join(APP_TEMPLATE_LINES) + "\n",
        "src/app/app.component.scss": APP_STYLES,
        "src/app/hero-card/hero-card.component.ts": HERO_CARD_COMPONENT,
        "src/app/shared/highlight.directive.ts": HIGHLIGHT_DIRECTIVE,
        "src/app/shared/currency-code.pipe.ts": CURRENCY_PIPE,
        "src/app/shared/constants.ts": "export const PAGE_SIZE = 20;\n",
        "node_modules/@angular/core/internal.component.ts":
            "@Component({ selector: 'ng-internal' }) export class Internal {}\n",
    }
    for rel_path, content in files.items():
        path = project_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return project_path


@pytest.fixture
def angular_project():
    """A small Angular workspace on disk."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield write_angular_project(Path(temp_dir))


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate tests from TEMPLATE_NAV_* variables and the cached config."""
    for key in list(os.environ):
        if key.startswith("TEMPLATE_NAV_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return NavigatorConfig(read_workers=4)


class InMemoryWorkspace(Workspace):
    """Workspace over a dict of relative path -> text."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})
        self.unreadable = set()
        self.read_hook: Optional[Callable[[str], None]] = None
        self.find_calls = 0

    def find_files(self, include_glob, exclude_glob=None) -> List[str]:
        self.find_calls += 1
        file_filter = FileFilter(include_glob, [exclude_glob] if exclude_glob else None)
        return [path for path in sorted(self.files) if file_filter.should_include_file(path)]

    def read_text(self, path: str) -> str:
        if self.read_hook is not None:
            self.read_hook(path)
        if path in self.unreadable:
            raise PermissionError(f"Permission denied: {path}")
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def exists(self, path: str) -> bool:
        return path in self.files


class ManualChangeSource(ChangeSource):
    """Change source driven by the test."""

    def __init__(self):
        self.subscriptions: List = []

    def subscribe(self, glob, callback):
        entry = (glob, callback)
        self.subscriptions.append(entry)

        def unsubscribe():
            if entry in self.subscriptions:
                self.subscriptions.remove(entry)

        return unsubscribe

    def emit(self, event: FileChangeEvent) -> None:
        for _glob, callback in list(self.subscriptions):
            callback(event)


class BlockingReads:
    """Read hook that parks the first read until released."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self._armed = True
        self._lock = threading.Lock()

    def __call__(self, path: str) -> None:
        with self._lock:
            first = self._armed
            self._armed = False
        if first:
            self.started.set()
            assert self.release.wait(5), "read was never released"


def component_source(selector: str) -> str:
    return f"@Component({{\n  selector: '{selector}',\n}})\nexport class X {{}}\n"


def pipe_source(name: str) -> str:
    return f"@Pipe({{ name: '{name}' }})\nexport class P {{}}\n"


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location/name."""
    for item in items:
        if "integration" in item.name or "test_service" in item.nodeid or "test_mcp_server" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
