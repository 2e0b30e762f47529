from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Union

from stationview.domain.payload import RenderPayload
from stationview.domain.units import PRESSURE, TEMPERATURE
from stationview.domain.window import WindowSpec
from stationview.errors import (
    EmptySliceError,
    InvalidPresetError,
    NotReadyError,
    ReloadInProgressError,
)
from stationview.sources.remote import SeriesSource
from stationview.store.series import SeriesStore
from stationview.transforms.series import SeriesTransformer
from stationview.window.resolver import NoOp, WindowResolver

logger = logging.getLogger(__name__)

RenderCallback = Callable[[RenderPayload], None]


class ControllerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class PresentationController:
    """Fetch once, window many times.

    The controller owns the current window (through its resolver) and the
    last emitted payload. ``set_window`` only re-slices the stored history;
    ``reload`` is the only operation that goes back to the source.
    """

    def __init__(
        self,
        source: SeriesSource,
        *,
        temperature_unit: str = "Celsius",
        pressure_unit: str = "Millibar",
        store: Optional[SeriesStore] = None,
        resolver: Optional[WindowResolver] = None,
        transformer: Optional[SeriesTransformer] = None,
        on_render: Optional[RenderCallback] = None,
    ) -> None:
        self.source = source
        self.store = store or SeriesStore()
        self.resolver = resolver or WindowResolver()
        self.transformer = transformer or SeriesTransformer()
        self.on_render = on_render
        registry = self.transformer.registry
        self._temperature_unit = registry.validate(TEMPERATURE, temperature_unit)
        self._pressure_unit = registry.validate(PRESSURE, pressure_unit)
        self._state = ControllerState.UNINITIALIZED
        self._payload: Optional[RenderPayload] = None
        self._reloads_in_flight = 0

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def payload(self) -> Optional[RenderPayload]:
        return self._payload

    @property
    def window(self) -> int:
        return self.resolver.resolve_last()

    @property
    def temperature_unit(self) -> str:
        return self._temperature_unit

    @property
    def pressure_unit(self) -> str:
        return self._pressure_unit

    @property
    def reloading(self) -> bool:
        return self._reloads_in_flight > 0

    async def reload(
        self,
        *,
        temperature_unit: Optional[str] = None,
        pressure_unit: Optional[str] = None,
    ) -> RenderPayload:
        """Fetch the history again and re-apply the current window.

        On failure the exception propagates and the previous payload, units
        and state stay as they were.
        """
        registry = self.transformer.registry
        temperature = registry.validate(
            TEMPERATURE, temperature_unit or self._temperature_unit
        )
        pressure = registry.validate(PRESSURE, pressure_unit or self._pressure_unit)

        self._reloads_in_flight += 1
        try:
            records = await asyncio.to_thread(self.source.fetch, temperature, pressure)
            self.store.load(records, temperature, pressure)
        finally:
            self._reloads_in_flight -= 1

        self._temperature_unit = temperature
        self._pressure_unit = pressure
        return self._render(self.resolver.resolve_last())

    def set_window(self, spec: Union[WindowSpec, str]) -> Optional[RenderPayload]:
        """Apply a new window and emit the payload for it.

        Returns ``None`` when nothing changed (unknown preset, cancelled
        custom input). Invalid custom input raises ``WindowInputError``.
        """
        if self.reloading:
            raise ReloadInProgressError("a reload is in progress; try again once it finishes")
        if self._state is ControllerState.UNINITIALIZED:
            raise NotReadyError("no data loaded yet")
        if isinstance(spec, str):
            spec = WindowSpec.of_preset(spec)
        try:
            count = self.resolver.resolve(spec)
        except InvalidPresetError as exc:
            logger.warning("ignoring window change: %s", exc)
            return None
        if count is NoOp:
            return None
        return self._render(count)

    def _render(self, sample_count: int) -> RenderPayload:
        snapshot = self.store.snapshot()
        if snapshot is None:
            raise NotReadyError("no data loaded yet")
        records = self.store.slice(sample_count)
        try:
            payload = self.transformer.build_payload(
                records,
                sample_count,
                snapshot.temperature_unit,
                snapshot.pressure_unit,
            )
        except EmptySliceError:
            logger.error(
                "empty slice for window of %d samples over %d records",
                sample_count,
                self.store.size(),
            )
            raise
        self._payload = payload
        self._state = ControllerState.READY
        logger.info(
            "rendering %d of %d records (window=%d)",
            len(records),
            self.store.size(),
            sample_count,
        )
        if self.on_render is not None:
            self.on_render(payload)
        return payload
