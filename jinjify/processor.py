from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Iterator
from typing import BinaryIO

from .compiler import TemplateCompiler, wrap_module
from .config import CONFIG, BuildConfig, TransformOptions, resolve_extensions
from .errors import CompileError
from .paths import is_eligible, resolve_identifier

logger = logging.getLogger(__name__)


class TransformState(enum.Enum):
    FILTERING = "filtering"
    PASSTHROUGH = "passthrough"
    BUFFERING = "buffering"
    FINISHED = "finished"
    FAILED = "failed"
    ABORTED = "aborted"


class FileTransform:
    """Per-file stream transform.

    Files whose extension is not configured pass through chunk by chunk.
    Eligible files are buffered whole and replaced on ``end()`` by a single
    chunk holding the compiled module, or fail with a CompileError and emit
    nothing.
    """

    def __init__(
        self,
        path: str,
        options: TransformOptions | None = None,
        config: BuildConfig | None = None,
        compiler: TemplateCompiler | None = None,
    ) -> None:
        self.path = path
        self.options = options or TransformOptions()
        self.config = CONFIG if config is None else config
        self.compiler = compiler or TemplateCompiler()
        self.state = TransformState.FILTERING
        self._chunks: list[bytes] = []

        extensions = resolve_extensions(self.options.extensions)
        if not is_eligible(path, extensions):
            logger.debug("Passing %s through untouched", path)
            self.state = TransformState.PASSTHROUGH
            return
        self.config.merge(self.options)
        self.state = TransformState.BUFFERING

    @property
    def eligible(self) -> bool:
        return self.state is not TransformState.PASSTHROUGH

    def write(self, chunk: bytes) -> list[bytes]:
        """Feed one chunk; returns whatever can be emitted right away."""
        if self.state is TransformState.PASSTHROUGH:
            return [chunk]
        if self.state is not TransformState.BUFFERING:
            raise RuntimeError(f"cannot write to a {self.state.value} transform")
        self._chunks.append(chunk)
        return []

    def end(self) -> list[bytes]:
        """Signal end of input and return the remaining output chunks."""
        if self.state is TransformState.PASSTHROUGH:
            return []
        if self.state is not TransformState.BUFFERING:
            raise RuntimeError(f"cannot end a {self.state.value} transform")
        source = b"".join(self._chunks).decode("utf-8", errors="replace")
        self._chunks = []
        try:
            identifier = resolve_identifier(self.path, self.config)
            fragment = self.compiler.compile(identifier, source, self.config, name=self.path)
        except CompileError as e:
            if e.name is None:
                e.name = self.path
            self.state = TransformState.FAILED
            logger.error("Failed to compile %s: %s", self.path, e)
            raise
        self.state = TransformState.FINISHED
        return [wrap_module(fragment).encode("utf-8")]

    def abort(self) -> None:
        """Drop buffered input without compiling."""
        self._chunks = []
        self.state = TransformState.ABORTED

    def iter_transform(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        for chunk in chunks:
            yield from self.write(chunk)
        yield from self.end()

    def process_stream(self, src: BinaryIO, dst: BinaryIO, chunk_size: int = 65536) -> None:
        chunks = iter(lambda: src.read(chunk_size), b"")
        for out in self.iter_transform(chunks):
            dst.write(out)
