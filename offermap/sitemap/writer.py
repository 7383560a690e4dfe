"""Sitemap persistence and publishing."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class SitemapWriteError(OSError):
    pass


def write_sitemap(xml: str, destination: Path | str) -> Path:
    """Atomically replace ``destination`` with ``xml`` plus one trailing newline.

    The document is written to a temporary file next to the destination and
    renamed over it, so readers see either the previous file or the new one.
    """
    path = Path(destination)
    payload = xml.rstrip("\n") + "\n"
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            _discard(tmp_name)
        raise SitemapWriteError(f"Could not write {path}: {exc}") from exc
    logger.info("Wrote %s (%d bytes)", path, len(payload.encode("utf-8")))
    return path


def upload_sitemap(path: Path, bucket: str) -> None:
    endpoint = os.environ.get("AWS_S3_ENDPOINT")
    session = boto3.session.Session()
    client = session.client(
        "s3",
        endpoint_url=endpoint,
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY"),
    )
    try:
        client.upload_file(str(path), bucket, path.name, ExtraArgs={"ContentType": "application/xml"})
    except (BotoCoreError, ClientError, S3UploadFailedError) as exc:
        raise SitemapWriteError(f"Upload of {path.name} to s3://{bucket} failed: {exc}") from exc
    logger.info("Uploaded %s to s3://%s", path.name, bucket)


def _target_mode(path: Path) -> int:
    """Keep the mode of the file being replaced, else honour the umask.

    mkstemp always creates 0600 files, which a static server may not read.
    """
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
