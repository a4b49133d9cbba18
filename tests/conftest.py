"""
pytest 配置和共享 fixtures。

使用方法：
    # 运行所有测试
    uv run pytest
"""

from collections.abc import Generator

import pytest
import structlog

from trace_listener.core.config import Settings
from trace_listener.core.domain.events import LogEvent
from trace_listener.core.infrastructure.adapters.delegating_sink import DelegatingSink
from trace_listener.core.infrastructure.default_sink import reset_default_sink
from trace_listener.modules.tracing.application.listener import (
    StructuredTraceListener,
)

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        LOG_LEVEL="DEBUG",
        SELF_LOG_ENABLED=False,
        DUPLICATE_PROPERTY_POLICY="last_wins",
    )


@pytest.fixture(autouse=True)
def _isolate_global_state() -> Generator[None, None, None]:
    """每个测试结束后恢复默认 sink 与 structlog 配置。"""
    yield
    reset_default_sink()
    structlog.reset_defaults()


# ============================================
# Sink / Listener Fixtures
# ============================================


@pytest.fixture
def captured_events() -> list[LogEvent]:
    """被 sink 接收的事件列表。"""
    return []


@pytest.fixture
def capturing_sink(captured_events: list[LogEvent]) -> DelegatingSink:
    """把事件追加到 captured_events 的 sink。"""
    return DelegatingSink(captured_events.append)


@pytest.fixture
def listener(capturing_sink: DelegatingSink) -> StructuredTraceListener:
    """绑定到 capturing_sink 的 listener。"""
    return StructuredTraceListener(capturing_sink)
