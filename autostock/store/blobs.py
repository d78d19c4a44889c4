"""Fachada de archivos / Blob store facade.

Los archivos se guardan en disco bajo `<root>/<bucket>/<path>` y se sirven
de forma publica en `<public_base_url>/<bucket>/<path>`.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from autostock.store.records import StoreError


class BlobStoreError(StoreError):
    """Fallo del almacenamiento de archivos / Blob store failure."""


@runtime_checkable
class BlobStore(Protocol):
    async def upload(self, bucket: str, path: str, data: bytes) -> None: ...

    async def remove(self, bucket: str, paths: list[str]) -> None: ...

    def public_url(self, bucket: str, path: str) -> str: ...


class LocalBlobStore:
    """Archivos en el sistema de archivos local / Local filesystem blobs."""

    def __init__(self, root: Path | str, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        base = (self.root / bucket).resolve()
        target = (base / path).resolve()
        if base not in target.parents:
            raise BlobStoreError(f"Path escapes bucket {bucket}: {path!r}")
        return target

    async def upload(self, bucket: str, path: str, data: bytes) -> None:
        """Escribir un archivo nuevo / Write a new blob (no overwrite)."""
        target = self._resolve(bucket, path)
        if target.exists():
            raise BlobStoreError(f"Blob already exists: {bucket}/{path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise BlobStoreError(f"upload {bucket}/{path} failed: {exc}") from exc

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Borrar archivos; los ausentes se ignoran / Remove blobs, missing ones are ignored."""
        targets = [self._resolve(bucket, p) for p in paths]
        try:
            for target in targets:
                target.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStoreError(f"remove from {bucket} failed: {exc}") from exc

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_base_url}/{bucket}/{quote(path)}"
