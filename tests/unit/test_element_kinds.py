"""Unit tests for element kinds and their clamp-and-convert rules."""

import numpy as np
import pytest
import taichi as ti

import pyfastresample as pr
from pyfastresample.errors import UnsupportedElementKindError
from pyfastresample.rastermanip import element_kinds as ek
from pyfastresample.rastermanip import gridio


class TestBuiltinKinds:
    """Test the registered kinds."""

    @pytest.mark.unit
    def test_available(self):
        names = ek.available_element_kinds()
        for name in ("uint8_clamped", "uint16_clamped", "int16_clamped",
                     "int32_clamped", "float32", "float64"):
            assert name in names

    @pytest.mark.unit
    def test_uint8_clamped_rounding(self):
        values = np.array([0.5, 1.5, 2.5, 254.6, 300.0, -5.0, np.nan])
        result = ek.UINT8_CLAMPED.convert(values)
        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result, [0, 2, 2, 255, 255, 0, 0])

    @pytest.mark.unit
    def test_int16_clamped_range(self):
        result = ek.INT16_CLAMPED.convert(np.array([-40000.0, -1.4, 40000.0]))
        np.testing.assert_array_equal(result, [-32768, -1, 32767])

    @pytest.mark.unit
    def test_uint16_clamped_range(self):
        result = ek.UINT16_CLAMPED.convert(np.array([-1.0, 1234.5, 70000.0]))
        np.testing.assert_array_equal(result, [0, 1234, 65535])

    @pytest.mark.unit
    def test_float_kinds_cast_only(self):
        values = np.array([-1.25, 1e6])
        assert ek.FLOAT32.convert(values).dtype == np.float32
        np.testing.assert_array_equal(ek.FLOAT64.convert(values), values)

    @pytest.mark.unit
    def test_compute_dtypes(self):
        assert ek.UINT8_CLAMPED.compute_dtype == np.float32
        assert ek.FLOAT32.compute_dtype == np.float32
        for kind in (ek.UINT16_CLAMPED, ek.INT16_CLAMPED, ek.INT32_CLAMPED, ek.FLOAT64):
            assert kind.compute_dtype == np.float64

    @pytest.mark.unit
    def test_staging_widens_for_wide_sources(self):
        u8 = np.zeros(2, dtype=np.uint8)
        assert gridio.staging_dtype(u8, ek.UINT8_CLAMPED) == np.float32
        for dtype in (np.int32, np.int64, np.float64):
            wide = np.zeros(2, dtype=dtype)
            assert gridio.staging_dtype(wide, ek.UINT8_CLAMPED) == np.float64
            assert gridio.staging_dtype(wide, ek.FLOAT32) == np.float64


class TestKindResolution:
    """Test name lookup and registration."""

    @pytest.mark.unit
    def test_get_by_name_and_instance(self):
        assert ek.get_element_kind("float32") is ek.FLOAT32
        assert ek.get_element_kind(ek.FLOAT32) is ek.FLOAT32

    @pytest.mark.unit
    def test_unknown_name(self):
        with pytest.raises(UnsupportedElementKindError, match="Unknown element kind"):
            ek.get_element_kind("uint8_wrapping")

    @pytest.mark.unit
    def test_bad_type(self):
        with pytest.raises(UnsupportedElementKindError):
            ek.get_element_kind(np.uint8)

    @pytest.mark.unit
    def test_unknown_kind_rejected_by_operations(self):
        with pytest.raises(UnsupportedElementKindError):
            pr.scale_nearest([1, 2, 3, 4], 2, 2, 4, 4, element_kind="complex64")

    @pytest.mark.unit
    def test_register_custom_kind(self):
        def convert(values):
            return (np.asarray(values) >= 0.5).astype(np.uint8)

        threshold = ek.ElementKind(
            "test_threshold", np.dtype(np.uint8), ti.u8, np.dtype(np.float32), convert
        )
        try:
            assert ek.register_element_kind(threshold) is threshold
            assert ek.get_element_kind("test_threshold") is threshold
        finally:
            ek._REGISTRY.pop("test_threshold", None)

    @pytest.mark.unit
    def test_register_rejects_non_kind(self):
        with pytest.raises(UnsupportedElementKindError):
            ek.register_element_kind("uint8")
