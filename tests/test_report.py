"""Tests for BuildSnapshot and its converters."""
from datetime import datetime, timezone

from buildinfo.config import BuildConfig
from buildinfo.dto import BuildInfoConverter, BuildInfoResponse, BuildSnapshot, ModuleVersion
from buildinfo.registry import BuildInfoRegistry

from .conftest import STARTED, FakeClock


def _registry(config: BuildConfig, clock: FakeClock) -> BuildInfoRegistry:
    return BuildInfoRegistry(config, startup_time=STARTED, clock=clock)


class TestBuildInfoConverter:

    def test_from_registry(self, clock: FakeClock) -> None:
        config = BuildConfig(
            build_time_unix="1000000000",
            build_hash="abc123",
            release_version="v1.2.3",
            build_url="https://ci.example.com/builds/42",
            modules=[("pydantic", "2.7.1")],
        )
        clock.advance(3725)
        snapshot = BuildInfoConverter.from_registry(_registry(config, clock))
        assert isinstance(snapshot, BuildSnapshot)
        assert snapshot.build_hash == "abc123"
        assert snapshot.release_version == "v1.2.3"
        assert snapshot.build_time == datetime(2001, 9, 9, 1, 46, 40, tzinfo=timezone.utc)
        assert snapshot.captured_at == clock()
        assert snapshot.uptime_seconds == 3725
        assert snapshot.modules == (ModuleVersion(path="pydantic", version="2.7.1"),)

    def test_dev_build_has_no_build_time(self, clock: FakeClock) -> None:
        snapshot = BuildInfoConverter.from_registry(_registry(BuildConfig(), clock))
        assert snapshot.build_time is None
        assert snapshot.to_dict()["build_time"] is None
        assert snapshot.to_dict()["build_url"] is None

    def test_explicit_capture_time(self, clock: FakeClock) -> None:
        reg = _registry(BuildConfig(), clock)
        later = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert BuildInfoConverter.from_registry(reg, now=later).uptime_seconds == 3600

    def test_to_dict(self, clock: FakeClock) -> None:
        snapshot = BuildInfoConverter.from_registry(
            _registry(BuildConfig(build_hash="abc123", modules=[("pydantic", "2.7.1")]), clock))
        data = BuildInfoConverter.to_dict(snapshot)
        assert data["build_hash"] == "abc123"
        assert data["startup_time"] == STARTED.isoformat()
        assert data["uptime_seconds"] == 0
        assert data["modules"] == [{"path": "pydantic", "version": "2.7.1"}]

    def test_to_response(self, clock: FakeClock) -> None:
        config = BuildConfig(build_time_unix="1000000000", build_hash="abc123", release_version="v1.2.3")
        snapshot = BuildInfoConverter.from_registry(_registry(config, clock))
        response = BuildInfoConverter.to_response(snapshot)
        assert isinstance(response, BuildInfoResponse)
        assert response.build_time == "2001-09-09T01:46:40+00:00"
        assert response.build_url is None
        assert response.modules == []
        assert response.model_dump()["release_version"] == "v1.2.3"

    def test_schema_example(self) -> None:
        schema = BuildInfoResponse.model_json_schema()
        assert schema["example"]["build_hash"] == "abc123"
