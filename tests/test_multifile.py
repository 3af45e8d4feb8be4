"""Tests for the multi-file router"""

import json
import threading

import pytest

from multifile_logger import Severity, LogMessage
from multifile_logger.core.errors import (
    ErrorKind,
    InitFailedError,
    InvalidConfigError,
    MultiFileError,
    WriteFailedError,
)
from multifile_logger.core.output_config import OutputConfig
from multifile_logger.core.severity import FULL_SLOT, LEVEL_COUNT, LEVEL_NAMES
from multifile_logger.formatters import JSONFormatter, TextFormatter
from multifile_logger.monitoring import MetricsCollector
from multifile_logger.writers import (
    FileOutput,
    MultiFileLogWriter,
    RouterState,
    derive_filename,
    split_filename,
)


class MockOutput(FileOutput):
    """In-memory output for testing."""

    def __init__(self, factory):
        self._factory = factory
        self.config = None
        self.init_formatter = None
        self.messages = []
        self.flush_count = 0
        self.shutdown_count = 0

    @property
    def level(self):
        return self.config.level if self.config else None

    @property
    def filename(self):
        return self.config.filename if self.config else ""

    def init(self, config, formatter=None):
        self.config = OutputConfig.parse(config)
        self.init_formatter = formatter
        if self.filename in self._factory.fail_init:
            raise OSError(f"cannot open {self.filename}")
        if self.filename in self._factory.init_errors:
            raise self._factory.init_errors[self.filename]

    def write(self, msg):
        if self.filename in self._factory.fail_write:
            raise WriteFailedError("disk full", self.filename)
        self.messages.append(msg)

    def flush(self):
        self.flush_count += 1
        if self.filename in self._factory.fail_flush:
            raise OSError("flush failed")

    def shutdown(self):
        self.shutdown_count += 1
        if self.filename in self._factory.fail_shutdown:
            raise OSError("close failed")


class MockOutputFactory:
    """Creates MockOutputs and remembers them."""

    def __init__(self):
        self.created = []
        self.fail_init = set()
        self.init_errors = {}
        self.fail_write = set()
        self.fail_flush = set()
        self.fail_shutdown = set()

    def __call__(self):
        output = MockOutput(self)
        self.created.append(output)
        return output

    def get(self, filename):
        for output in self.created:
            if output.filename == filename:
                return output
        raise KeyError(filename)

    def total_writes(self):
        return sum(len(o.messages) for o in self.created)


@pytest.fixture
def factory():
    return MockOutputFactory()


def make_router(factory, config, metrics=None):
    router = MultiFileLogWriter(output_factory=factory, metrics=metrics)
    router.init(config)
    return router


def one_of_each():
    return [LogMessage(severity=sev, text=f"{sev!s} message") for sev in Severity]


class TestDeriveFilename:
    """Test dedicated file name derivation."""

    def test_split_filename(self):
        assert split_filename("app.log") == ("app", ".log")
        assert split_filename("logs/app.log") == ("logs/app", ".log")
        assert split_filename("app") == ("app", "")

    def test_error_file_name(self, factory):
        output = factory()
        output.init({"filename": "app.log"})
        assert derive_filename(output, Severity.ERROR) == "app.error.log"

    def test_keeps_directory(self, factory):
        output = factory()
        output.init({"filename": "logs/project.log"})
        assert derive_filename(output, Severity.DEBUG) == "logs/project.debug.log"

    def test_only_last_extension_is_suffix(self, factory):
        output = factory()
        output.init({"filename": "app.2024.txt"})
        assert derive_filename(output, Severity.ALERT) == "app.2024.alert.txt"

    def test_no_suffix(self, factory):
        output = factory()
        output.init({"filename": "app"})
        assert derive_filename(output, Severity.NOTICE) == "app.notice"


class TestMultiFileInit:
    """Test router initialization."""

    def test_initial_state(self):
        router = MultiFileLogWriter()
        assert router.state is RouterState.UNINITIALIZED
        assert router.full_output is None
        assert len(router.outputs) == LEVEL_COUNT + 1

    def test_separate_omitted_creates_only_full_output(self, factory):
        router = make_router(factory, '{"filename": "app.log"}')

        assert router.state is RouterState.INITIALIZED
        assert len(factory.created) == 1
        assert router.full_output is factory.created[0]
        assert router.outputs[FULL_SLOT] is router.full_output
        assert all(slot is None for slot in router.outputs[:FULL_SLOT])
        assert router.separate == ()

    def test_slots_match_separate_subset(self, factory):
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["error", "debug"]},
        )

        populated = [i for i, slot in enumerate(router.outputs[:FULL_SLOT]) if slot]
        assert populated == [Severity.ERROR, Severity.DEBUG]
        assert router.full_output is not None
        assert router.separate == (Severity.ERROR, Severity.DEBUG)

    def test_all_severities(self, factory):
        router = make_router(
            factory,
            {"filename": "app.log", "separate": list(LEVEL_NAMES)},
        )

        assert len(factory.created) == LEVEL_COUNT + 1
        for sev in Severity:
            output = router.output_for(sev)
            assert output.level == sev
            assert output.filename == f"app.{sev!s}.log"

    def test_dedicated_config_pins_level_and_filename(self, factory):
        config = {
            "filename": "logs/app.log",
            "separate": ["error"],
            "maxLines": 1000,
            "maxsize": 4096,
            "daily": False,
            "maxDays": 3,
            "rotate": True,
            "perm": "0600",
            "custom": {"kept": True},
        }
        router = make_router(factory, json.dumps(config))

        error_output = router.output_for(Severity.ERROR)
        raw = error_output.config.raw
        assert raw["filename"] == "logs/app.error.log"
        assert raw["level"] == int(Severity.ERROR)
        for key in ("maxLines", "maxsize", "daily", "maxDays", "rotate", "perm", "custom"):
            assert raw[key] == config[key]

    def test_full_output_gets_config_verbatim(self, factory):
        config = {"filename": "app.log", "separate": ["info"], "maxDays": 30}
        router = make_router(factory, config)

        assert router.full_output.config.raw == config
        assert router.full_output.level is None

    def test_unknown_separate_entries_ignored(self, factory):
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["Error", "fatal", "warn", 3, "error"]},
        )

        assert router.separate == (Severity.ERROR,)
        assert len(factory.created) == 2

    def test_invalid_json_raises_invalid_config(self, factory):
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InvalidConfigError) as exc_info:
            router.init("{not json")

        assert exc_info.value.kind is ErrorKind.INVALID_CONFIG
        assert router.state is RouterState.UNINITIALIZED
        assert factory.created == []

    def test_separate_not_a_list_raises_invalid_config(self, factory):
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InvalidConfigError):
            router.init({"filename": "app.log", "separate": "error"})

    def test_full_output_failure_raises_init_failed(self, factory):
        factory.fail_init.add("app.log")
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InitFailedError) as exc_info:
            router.init({"filename": "app.log", "separate": ["error"]})

        assert exc_info.value.kind is ErrorKind.INIT_FAILED
        assert isinstance(exc_info.value.__cause__, OSError)
        assert router.state is RouterState.UNINITIALIZED
        assert router.full_output is None
        assert len(factory.created) == 1

    def test_dedicated_output_failure_raises_and_cleans_up(self, factory):
        factory.fail_init.add("app.debug.log")
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InitFailedError):
            router.init({"filename": "app.log", "separate": ["error", "debug"]})

        assert router.state is RouterState.UNINITIALIZED
        assert all(slot is None for slot in router.outputs)
        # Full, error and the failed debug output were all released
        assert [o.shutdown_count for o in factory.created] == [1, 1, 1]

    def test_unexpected_init_error_is_wrapped_and_cleans_up(self, factory):
        factory.init_errors["app.error.log"] = RuntimeError("disk quota")
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InitFailedError) as exc_info:
            router.init({"filename": "app.log", "separate": ["error"]})

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert router.state is RouterState.UNINITIALIZED
        assert router.full_output is None
        assert [o.shutdown_count for o in factory.created] == [1, 1]

    def test_init_twice_raises(self, factory):
        router = make_router(factory, {"filename": "app.log"})

        with pytest.raises(MultiFileError):
            router.init({"filename": "other.log"})

        assert len(factory.created) == 1

    def test_formatter_forwarded_to_outputs(self, factory):
        formatter = TextFormatter("{level}: {message}")
        router = MultiFileLogWriter(output_factory=factory)
        router.init({"filename": "app.log", "separate": ["error"]}, formatter=formatter)

        assert router.formatter is formatter
        assert all(o.init_formatter is formatter for o in factory.created)

    def test_formatter_by_name(self, factory):
        router = MultiFileLogWriter(output_factory=factory)
        router.init({"filename": "app.log"}, formatter="json")

        assert isinstance(router.formatter, JSONFormatter)

    def test_unknown_formatter_name_raises(self, factory):
        router = MultiFileLogWriter(output_factory=factory)

        with pytest.raises(InvalidConfigError):
            router.init({"filename": "app.log"}, formatter="xml")

        assert factory.created == []

    def test_format_without_override_returns_text(self, factory):
        router = make_router(factory, {"filename": "app.log"})
        msg = LogMessage(Severity.INFO, "plain")

        assert router.format(msg) == "plain"


class TestMultiFileDispatch:
    """Test message dispatch."""

    def test_one_message_per_severity(self, factory):
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["error", "debug"]},
        )

        for msg in one_of_each():
            router.write(msg)

        assert factory.total_writes() == 10
        assert len(factory.get("app.log").messages) == 8
        assert [m.severity for m in factory.get("app.error.log").messages] == [Severity.ERROR]
        assert [m.severity for m in factory.get("app.debug.log").messages] == [Severity.DEBUG]

    def test_full_output_only_without_separate(self, factory):
        router = make_router(factory, {"filename": "app.log"})

        for msg in one_of_each():
            assert router.write(msg) == 1

        assert len(factory.created) == 1
        assert factory.total_writes() == 8

    def test_write_returns_number_of_outputs(self, factory):
        router = make_router(factory, {"filename": "app.log", "separate": ["warning"]})

        assert router.write(LogMessage(Severity.WARNING, "w")) == 2
        assert router.write(LogMessage(Severity.INFO, "i")) == 1

    def test_same_message_object_reaches_both_outputs(self, factory):
        router = make_router(factory, {"filename": "app.log", "separate": ["critical"]})
        msg = LogMessage(Severity.CRITICAL, "boom")

        router.write(msg)

        assert factory.get("app.log").messages == [msg]
        assert factory.get("app.critical.log").messages == [msg]

    def test_full_output_failure_does_not_block_dedicated(self, factory):
        factory.fail_write.add("app.log")
        metrics = MetricsCollector()
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["error"]},
            metrics=metrics,
        )

        assert router.write(LogMessage(Severity.ERROR, "still logged")) == 1

        assert len(factory.get("app.error.log").messages) == 1
        snapshot = metrics.get_metrics()
        assert snapshot.writer_errors == 1
        assert snapshot.errors_by_output == {"app.log": 1}
        assert snapshot.writes_by_output == {"app.error.log": 1}

    def test_dedicated_failure_does_not_raise(self, factory):
        factory.fail_write.add("app.error.log")
        router = make_router(factory, {"filename": "app.log", "separate": ["error"]})

        assert router.write(LogMessage(Severity.ERROR, "e")) == 1
        assert len(factory.get("app.log").messages) == 1

    def test_write_before_init_raises(self):
        router = MultiFileLogWriter()

        with pytest.raises(MultiFileError):
            router.write(LogMessage(Severity.INFO, "too early"))

    def test_write_after_shutdown_raises(self, factory):
        router = make_router(factory, {"filename": "app.log"})
        router.shutdown()

        with pytest.raises(MultiFileError):
            router.write(LogMessage(Severity.INFO, "too late"))


class TestMultiFileLifecycle:
    """Test flush and shutdown."""

    def test_flush_visits_every_populated_slot_once(self, factory):
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["alert", "notice"]},
        )

        router.flush()

        assert [o.flush_count for o in factory.created] == [1, 1, 1]

    def test_flush_tolerates_failures(self, factory):
        factory.fail_flush.add("app.alert.log")
        metrics = MetricsCollector()
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["alert", "notice"]},
            metrics=metrics,
        )

        router.flush()

        assert [o.flush_count for o in factory.created] == [1, 1, 1]
        assert metrics.get_metrics().errors_by_output == {"app.alert.log": 1}

    def test_shutdown_visits_every_slot_once(self, factory):
        factory.fail_shutdown.add("app.log")
        router = make_router(
            factory,
            {"filename": "app.log", "separate": ["emergency", "debug"]},
        )

        router.shutdown()
        router.shutdown()

        assert router.state is RouterState.SHUT_DOWN
        assert [o.shutdown_count for o in factory.created] == [1, 1, 1]

    def test_init_after_shutdown_raises(self, factory):
        router = make_router(factory, {"filename": "app.log"})
        router.shutdown()

        with pytest.raises(MultiFileError):
            router.init({"filename": "app.log"})

    def test_context_manager(self, factory):
        with MultiFileLogWriter(output_factory=factory) as router:
            router.init({"filename": "app.log", "separate": ["info"]})
            router.write(LogMessage(Severity.INFO, "inside"))

        assert router.state is RouterState.SHUT_DOWN
        assert all(o.shutdown_count == 1 for o in factory.created)

    def test_repr(self, factory):
        router = make_router(factory, {"filename": "app.log", "separate": ["error"]})
        repr_str = repr(router)

        assert "app.log" in repr_str
        assert "error" in repr_str


class TestMultiFileWithFiles:
    """Test the router with real files."""

    def test_files_created_and_filled(self, tmp_path):
        filename = tmp_path / "project.log"
        router = MultiFileLogWriter()
        router.init(
            {"filename": str(filename), "separate": ["error", "debug"]},
            formatter=TextFormatter("{level} {message}"),
        )

        for msg in one_of_each():
            router.write(msg)
        router.shutdown()

        full_lines = filename.read_text().splitlines()
        assert full_lines == [f"{name} {name} message" for name in LEVEL_NAMES]
        assert (tmp_path / "project.error.log").read_text().splitlines() == ["error error message"]
        assert (tmp_path / "project.debug.log").read_text().splitlines() == ["debug debug message"]
        assert not (tmp_path / "project.info.log").exists()

    def test_full_output_level_limits_full_file(self, tmp_path):
        filename = tmp_path / "app.log"
        router = MultiFileLogWriter()
        router.init({"filename": str(filename), "level": "warning", "separate": ["debug"]})

        router.write(LogMessage(Severity.ERROR, "kept"))
        router.write(LogMessage(Severity.DEBUG, "only in debug file"))
        router.shutdown()

        assert "kept" in filename.read_text()
        assert "only in debug file" not in filename.read_text()
        assert "only in debug file" in (tmp_path / "app.debug.log").read_text()

    def test_unwritable_directory_raises_init_failed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        router = MultiFileLogWriter()

        with pytest.raises(InitFailedError):
            router.init({"filename": str(blocker / "app.log")})

    def test_concurrent_dispatch(self, tmp_path):
        filename = tmp_path / "app.log"
        router = MultiFileLogWriter()
        router.init({"filename": str(filename), "separate": ["error"]}, formatter="json")

        def worker(n):
            for i in range(100):
                sev = Severity.ERROR if i % 2 else Severity.INFO
                router.write(LogMessage(sev, f"worker {n} message {i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        router.shutdown()

        full_lines = filename.read_text().splitlines()
        error_lines = (tmp_path / "app.error.log").read_text().splitlines()
        assert len(full_lines) == 400
        assert len(error_lines) == 200
        assert all(json.loads(line)["level"] == "error" for line in error_lines)
