"""Where vhost files live: sites-available definitions + sites-enabled symlinks."""

from __future__ import annotations

import logging
from pathlib import Path

from rpx.constants import DEFAULT_SITE_NAME

log = logging.getLogger(__name__)


class FileConfigStore:
    """Debian-style nginx layout on the real filesystem."""

    def __init__(self, available_dir: Path, enabled_dir: Path, default_name: str = DEFAULT_SITE_NAME):
        self.available_dir = available_dir
        self.enabled_dir = enabled_dir
        self.default_name = default_name

    def definition_path(self, domain: str) -> Path:
        return self.available_dir / domain

    def activation_path(self, domain: str) -> Path:
        return self.enabled_dir / domain

    def write(self, domain: str, content: str) -> None:
        path = self.definition_path(domain)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def read(self, domain: str) -> str | None:
        path = self.definition_path(domain)
        if not path.is_file():
            return None
        return path.read_text()

    def activate(self, domain: str) -> None:
        """Point sites-enabled/<domain> at the definition (``ln -sf``)."""
        link = self.activation_path(domain)
        link.parent.mkdir(parents=True, exist_ok=True)
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(self.definition_path(domain))

    def remove(self, domain: str) -> None:
        for path in (self.activation_path(domain), self.definition_path(domain)):
            if path.is_symlink() or path.exists():
                log.debug("removing %s", path)
                path.unlink()

    def remove_default(self) -> bool:
        link = self.activation_path(self.default_name)
        if link.is_symlink() or link.exists():
            link.unlink()
            return True
        return False

    def enabled(self, domain: str) -> bool:
        link = self.activation_path(domain)
        return link.is_symlink() and link.resolve() == self.definition_path(domain).resolve()

    def enabled_domains(self) -> list[str]:
        if not self.enabled_dir.is_dir():
            return []
        return sorted(p.name for p in self.enabled_dir.iterdir())


class MemoryConfigStore:
    """In-process store with the same semantics, for dry runs and tests."""

    def __init__(self, *, with_default: bool = False, default_name: str = DEFAULT_SITE_NAME):
        self.default_name = default_name
        self.available: dict[str, str] = {}
        self.active: set[str] = set()
        if with_default:
            self.available[default_name] = ""
            self.active.add(default_name)

    def write(self, domain: str, content: str) -> None:
        self.available[domain] = content

    def read(self, domain: str) -> str | None:
        return self.available.get(domain)

    def activate(self, domain: str) -> None:
        if domain not in self.available:
            raise FileNotFoundError(domain)
        self.active.add(domain)

    def remove(self, domain: str) -> None:
        self.active.discard(domain)
        self.available.pop(domain, None)

    def remove_default(self) -> bool:
        if self.default_name in self.active:
            self.active.discard(self.default_name)
            return True
        return False

    def enabled(self, domain: str) -> bool:
        return domain in self.active

    def enabled_domains(self) -> list[str]:
        return sorted(self.active)
