"""YAML decoding behind a small decoder interface.

PyYAML does the actual parsing. The trust mode selects the loader
class: SafeLoader for untrusted text, UnsafeLoader when the host
explicitly trusts the source. Syntax errors are re-raised as
YAMLDecodeError carrying 1-indexed line and column positions; in
trusted mode, failures raised by python/* constructors are wrapped too.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import yaml

from yaml_remote.errors import YAMLDecodeError
from yaml_remote.models.request import TrustMode

logger = logging.getLogger(__name__)

LOADERS: dict[TrustMode, type[yaml.SafeLoader] | type[yaml.UnsafeLoader]] = {
    TrustMode.safe: yaml.SafeLoader,
    TrustMode.trusted: yaml.UnsafeLoader,
}


class BaseDecoder(ABC):
    """Abstract base class for response-text decoders.

    Every call states its trust mode; there is no decoder-wide flag.
    """

    @abstractmethod
    def decode(
        self,
        text: str,
        trust: TrustMode,
        multi_document: bool = False,
        source_name: str = "<string>",
    ) -> Any:
        """Decode text into a value.

        Args:
            text: Document text as received from the fetcher.
            trust: Whether arbitrary constructs may be built.
            multi_document: If True, return a list with one entry per
                document in the stream.
            source_name: Name used in error messages (usually the URL).

        Returns:
            The decoded value, or a list of values in multi-document mode.

        Raises:
            YAMLDecodeError: If the text cannot be decoded.
        """
        ...


class PyYAMLDecoder(BaseDecoder):
    """Decoder backed by PyYAML.

    In single-document mode a stream holding more than one document is
    rejected with YAMLDecodeError ("expected a single document in the
    stream"). Empty text decodes to None, or to [] in multi-document
    mode.
    """

    def decode(
        self,
        text: str,
        trust: TrustMode,
        multi_document: bool = False,
        source_name: str = "<string>",
    ) -> Any:
        loader_cls = LOADERS[TrustMode(trust)]
        try:
            loader = loader_cls(text)
            try:
                if multi_document:
                    documents = []
                    while loader.check_data():
                        documents.append(loader.get_data())
                    return documents
                return loader.get_single_data()
            finally:
                loader.dispose()
        except yaml.YAMLError as e:
            line = None
            column = None
            if getattr(e, "problem_mark", None) is not None:
                line = e.problem_mark.line + 1
                column = e.problem_mark.column + 1
            logger.debug(
                "YAML decode failed. source=%s line=%s column=%s", source_name, line, column
            )
            raise YAMLDecodeError(
                message=str(e),
                line=line,
                column=column,
                source_name=source_name,
            ) from e
        except Exception as e:
            if trust != TrustMode.trusted:
                raise
            # constructors called by python/* tags can raise anything
            logger.debug(
                "YAML constructor failed. source=%s error=%s", source_name, type(e).__name__
            )
            raise YAMLDecodeError(
                message=f"{type(e).__name__}: {e}",
                line=None,
                column=None,
                source_name=source_name,
            ) from e
