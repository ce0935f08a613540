"""Analysis submission wrapper."""

from __future__ import annotations

import json
from typing import IO, Any, Mapping, Optional, Sequence, cast

from ..context import Context
from .base import Resource
from ._common_types import (
    _detect_classification,
    _normalize_classification,
    _normalize_name_sequence,
    _normalize_tlp,
)
from .analyses_types import AnalysisParams, AnalysisResponse, MultipleAnalysisResponse


class Analyses(Resource):
    """Submit observables and files for analysis.

    Each submission creates a job; poll it with ``client.jobs.get`` or
    :func:`intelowl.tools.jobs.wait_for_job`.
    """

    def observable(
        self,
        observable_name: str,
        *,
        classification: Optional[str] = None,
        analyzers: Optional[str | Sequence[str]] = None,
        connectors: Optional[str | Sequence[str]] = None,
        playbook: Optional[str] = None,
        tlp: str = "CLEAR",
        runtime_configuration: Optional[Mapping[str, Any]] = None,
        tags_labels: Optional[str | Sequence[str]] = None,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> AnalysisResponse:
        """Submit one observable.

        Parameters
        ----------
        observable_name
            The observable value, e.g. an IP address or domain.
        classification
            One of ``ip``, ``url``, ``domain``, ``hash``, ``generic``. Detected
            from the value when omitted.
        analyzers
            Analyzer names to run; the server's defaults when empty.
        connectors
            Connector names to run.
        playbook
            Playbook name to run instead of explicit plugin lists.
        tlp
            Traffic Light Protocol level.
        runtime_configuration
            Per-plugin parameter overrides.
        tags_labels
            Labels of tags to attach to the job.
        ctx
            Cancellation context.
        timeout
            Request timeout in seconds.

        Returns
        -------
        AnalysisResponse
            Submission result carrying the new ``job_id``.
        """
        if not isinstance(observable_name, str) or not observable_name.strip():
            raise ValueError(f"Invalid observable_name: {observable_name!r}")
        observable_name = observable_name.strip()
        if classification is None:
            classification = _detect_classification(observable_name)
        payload: dict[str, Any] = {
            "observable_name": observable_name,
            "observable_classification": _normalize_classification(classification),
            **self._options(analyzers, connectors, playbook, tlp, runtime_configuration, tags_labels),
        }
        response = self._post("/api/analyze_observable", ctx=ctx, json=payload, into=AnalysisResponse, timeout=timeout)
        return cast(AnalysisResponse, response)

    def multiple_observables(
        self,
        observables: Sequence[str | tuple[str, str]],
        *,
        analyzers: Optional[str | Sequence[str]] = None,
        connectors: Optional[str | Sequence[str]] = None,
        playbook: Optional[str] = None,
        tlp: str = "CLEAR",
        runtime_configuration: Optional[Mapping[str, Any]] = None,
        tags_labels: Optional[str | Sequence[str]] = None,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> MultipleAnalysisResponse:
        """Submit several observables as separate jobs in one request.

        ``observables`` holds plain values (classification detected) or
        ``(classification, value)`` pairs. Other options are as in
        :meth:`observable`.
        """
        if isinstance(observables, str) or not observables:
            raise ValueError("observables must be a non-empty sequence")
        pairs: list[list[str]] = []
        for entry in observables:
            if isinstance(entry, str):
                value = entry.strip()
                classification = _detect_classification(value)
            elif isinstance(entry, (tuple, list)) and len(entry) == 2:
                classification, value = _normalize_classification(entry[0]), str(entry[1]).strip()
            else:
                raise ValueError(f"Invalid observable entry: {entry!r}")
            if not value:
                raise ValueError(f"Invalid observable entry: {entry!r}")
            pairs.append([classification, value])

        payload: dict[str, Any] = {
            "observables": pairs,
            **self._options(analyzers, connectors, playbook, tlp, runtime_configuration, tags_labels),
        }
        response = self._post(
            "/api/analyze_multiple_observables",
            ctx=ctx,
            json=payload,
            into=MultipleAnalysisResponse,
            timeout=timeout,
        )
        return cast(MultipleAnalysisResponse, response)

    def file(
        self,
        file: bytes | IO[bytes],
        *,
        file_name: Optional[str] = None,
        analyzers: Optional[str | Sequence[str]] = None,
        connectors: Optional[str | Sequence[str]] = None,
        playbook: Optional[str] = None,
        tlp: str = "CLEAR",
        runtime_configuration: Optional[Mapping[str, Any]] = None,
        tags_labels: Optional[str | Sequence[str]] = None,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> AnalysisResponse:
        """Upload a file for analysis as a multipart request.

        ``file`` is raw bytes or a binary file object. ``file_name`` defaults
        to the file object's name and is required for raw bytes. Other options
        are as in :meth:`observable`.
        """
        if file_name is None:
            name = getattr(file, "name", None)
            file_name = name.replace("\\", "/").rsplit("/", 1)[-1] if isinstance(name, str) else None
        if not file_name:
            raise ValueError("file_name is required when uploading raw bytes")
        content = file if isinstance(file, bytes) else file.read()

        options = self._options(analyzers, connectors, playbook, tlp, runtime_configuration, tags_labels)
        form: dict[str, Any] = {"file_name": file_name}
        for key, value in options.items():
            # Multipart fields are flat strings; nested values travel as JSON text.
            form[key] = json.dumps(value) if isinstance(value, dict) else value
        response = self._post(
            "/api/analyze_file",
            ctx=ctx,
            data=form,
            files={"file": (file_name, content)},
            into=AnalysisResponse,
            timeout=timeout,
        )
        return cast(AnalysisResponse, response)

    @staticmethod
    def _options(
        analyzers: Optional[str | Sequence[str]],
        connectors: Optional[str | Sequence[str]],
        playbook: Optional[str],
        tlp: str,
        runtime_configuration: Optional[Mapping[str, Any]],
        tags_labels: Optional[str | Sequence[str]],
    ) -> AnalysisParams:
        options: AnalysisParams = {
            "analyzers_requested": _normalize_name_sequence(analyzers),
            "connectors_requested": _normalize_name_sequence(connectors),
            "tlp": _normalize_tlp(tlp),
            "runtime_configuration": dict(runtime_configuration or {}),
            "tags_labels": _normalize_name_sequence(tags_labels),
        }
        if playbook is not None:
            if not isinstance(playbook, str) or not playbook.strip():
                raise ValueError(f"Invalid playbook: {playbook!r}")
            options["playbook_requested"] = playbook.strip()
        return options
