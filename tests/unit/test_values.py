"""属性值转换单元测试。"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import BaseModel

from trace_listener.core.domain.events import Severity
from trace_listener.core.domain.exceptions import InvalidPropertyError
from trace_listener.core.domain.values import (
    LogEventProperty,
    PropertyValueConverter,
    ScalarValue,
    SequenceValue,
    StructureValue,
)
from trace_listener.modules.tracing.domain.entities import TraceEventType

# ============================================
# 测试辅助类
# ============================================


@dataclass
class Point:
    x: int
    y: int


class Order(BaseModel):
    order_id: str
    total: int


class Opaque:
    def __init__(self):
        self.visible = 1
        self._hidden = 2

    def __str__(self) -> str:
        return "Opaque()"


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("boom")


class UnreadableMapping(dict):
    def items(self):
        raise RuntimeError("cannot iterate")


class UnreadableAttribute:
    def __init__(self):
        self.visible = 1

    def __getattribute__(self, name):
        if name == "__dict__":
            raise RuntimeError("no attributes")
        return super().__getattribute__(name)


@pytest.fixture
def converter() -> PropertyValueConverter:
    return PropertyValueConverter(max_depth=10)


class TestConvert:
    """PropertyValueConverter 测试。"""

    @pytest.mark.parametrize(
        "value",
        [None, "text", True, 42, 1.5, Decimal("1.10"), b"\x01", TraceEventType.STOP],
    )
    def test_scalars(self, converter, value):
        """测试标量原样保留。"""
        assert converter.convert(value) == ScalarValue(value)

    def test_sequences(self, converter):
        """测试列表与元组转换为序列。"""
        assert converter.convert([1, 2]) == SequenceValue(
            (ScalarValue(1), ScalarValue(2))
        )
        assert converter.convert(("a",)) == SequenceValue((ScalarValue("a"),))

    def test_mapping_becomes_structure(self, converter):
        """测试字典转换为结构。"""
        value = converter.convert({"a": 1, 2: "b"})

        assert value == StructureValue(
            (
                LogEventProperty("a", ScalarValue(1)),
                LogEventProperty("2", ScalarValue("b")),
            )
        )

    def test_object_without_destructure_is_stringified(self, converter):
        """测试不解构时对象取字符串。"""
        assert converter.convert(Opaque()) == ScalarValue("Opaque()")
        assert converter.convert(Point(1, 2)) == ScalarValue("Point(x=1, y=2)")

    def test_destructure_dataclass(self, converter):
        """测试解构 dataclass。"""
        value = converter.convert(Point(1, 2), destructure=True)

        assert value.type_tag == "Point"
        assert value.to_python() == {"$type": "Point", "x": 1, "y": 2}

    def test_destructure_pydantic_model(self, converter):
        """测试解构 pydantic 模型。"""
        value = converter.convert(Order(order_id="o-1", total=3), destructure=True)

        assert value.render() == 'Order { order_id: "o-1", total: 3 }'

    def test_destructure_plain_object_skips_private(self, converter):
        """测试解构普通对象时跳过私有属性。"""
        value = converter.convert(Opaque(), destructure=True)

        assert [p.name for p in value.properties] == ["visible"]

    def test_depth_limit(self):
        """测试超过深度的值变为 null。"""
        converter = PropertyValueConverter(max_depth=2)

        assert converter.convert([[[1]]]) == SequenceValue(
            (SequenceValue((ScalarValue(None),)),)
        )

    def test_unprintable_value_raises(self, converter):
        """测试无法渲染的值抛出异常。"""
        with pytest.raises(InvalidPropertyError):
            converter.convert(Unprintable())

    def test_unprintable_mapping_key_raises(self, converter):
        """测试无法渲染的字典键抛出 InvalidPropertyError。"""
        with pytest.raises(InvalidPropertyError):
            converter.convert({Unprintable(): 1})

    def test_failing_iteration_raises(self, converter):
        """测试遍历失败的集合抛出 InvalidPropertyError。"""
        with pytest.raises(InvalidPropertyError):
            converter.convert(UnreadableMapping(a=1))

    def test_nested_unprintable_value_raises(self, converter):
        """测试嵌套的无法渲染值抛出 InvalidPropertyError。"""
        with pytest.raises(InvalidPropertyError):
            converter.convert([1, {"k": Unprintable()}])

    def test_failing_destructure_raises(self, converter):
        """测试解构时读取属性失败抛出 InvalidPropertyError。"""
        with pytest.raises(InvalidPropertyError):
            converter.convert(UnreadableAttribute(), destructure=True)


class TestRenderAndExport:
    """render / to_python 测试。"""

    def test_scalar_render(self):
        """测试标量渲染。"""
        assert ScalarValue(None).render() == "null"
        assert ScalarValue("x").render() == '"x"'
        assert ScalarValue("x").render("l") == "x"
        assert ScalarValue(True).render() == "True"
        assert ScalarValue(TraceEventType.WARNING).render() == "Warning"

    def test_structure_render(self):
        """测试结构渲染。"""
        value = StructureValue(
            (
                LogEventProperty("A", ScalarValue(1)),
                LogEventProperty("B", ScalarValue("x")),
            ),
            type_tag="Point",
        )

        assert value.render() == 'Point { A: 1, B: "x" }'
        assert str(value) == 'Point { A: 1, B: "x" }'

    def test_to_python(self):
        """测试导出为普通数据。"""
        guid = UUID("8f2b1f8e-4c1a-4a57-9d7b-2b7a0c5b1e10")
        moment = datetime(2025, 1, 6, 9, 0, tzinfo=UTC)

        assert ScalarValue(guid).to_python() == str(guid)
        assert ScalarValue(moment).to_python() == "2025-01-06T09:00:00+00:00"
        assert ScalarValue(TraceEventType.ERROR).to_python() == "Error"
        assert ScalarValue(Severity.WARNING).to_python() == "WARNING"
        assert ScalarValue(b"\xff").to_python() == "ff"
        assert SequenceValue((ScalarValue(1),)).to_python() == [1]
