# -*- coding: utf-8 -*-
"""
Tests for the resampler configuration record and handle lifecycle.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import dataclasses

import numpy as np
import pytest

import tapgen
from tapgen import (
    ConfigurationError,
    DegenerateKernelWarning,
    HandleState,
    QueryMisuseError,
    Resampler,
    ResamplerConfig,
    ResamplerFlags,
    ResamplerMethod,
    TapTable,
    TapgenError,
    create_resampler,
)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def config():
    return ResamplerConfig('lanczos', in_size=32, out_size=48)


@pytest.fixture
def built(config):
    rs = Resampler(config)
    rs.build()
    return rs


# ── Configuration record ────────────────────────────────────────────────


class TestResamplerConfig:

    def test_defaults(self, config):
        assert config.n_taps == 0
        assert config.shift == 0.0
        assert config.flags is ResamplerFlags.NONE
        assert config.n_phases is None
        assert dict(config.options) == {}

    def test_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.in_size = 4

    def test_options_copied(self):
        opts = {'max-taps': 4}
        cfg = ResamplerConfig('sinc', 10, 10, options=opts)
        opts['max-taps'] = 2
        assert cfg.options['max-taps'] == 4

    def test_options_read_only(self):
        cfg = ResamplerConfig('sinc', 10, 10, options={'max-taps': 4})
        with pytest.raises(TypeError):
            cfg.options['max-taps'] = 2

    def test_validate_returns_options(self):
        cfg = ResamplerConfig('cubic', 10, 10, options={'cubic-b': 0.0})
        assert cfg.validate().cubic_b == 0.0


class TestConfigurationErrors:

    @pytest.mark.parametrize("kwargs, message", [
        (dict(method='linear', in_size=0, out_size=4), "in_size"),
        (dict(method='linear', in_size=4, out_size=0), "out_size"),
        (dict(method='linear', in_size=4.0, out_size=4), "in_size"),
        (dict(method='linear', in_size=4, out_size=8, n_phases=4),
         "n_phases"),
        (dict(method='linear', in_size=4, out_size=4, n_taps=-2), "n_taps"),
        (dict(method='linear', in_size=4, out_size=4, shift=float('nan')),
         "shift"),
        (dict(method='bilinear', in_size=4, out_size=4), "Unknown"),
        (dict(method='lanczos', in_size=4, out_size=4,
              options={'envelope': 9.0}), "envelope"),
        (dict(method='lanczos', in_size=8, out_size=16,
              options={'envelope': float('nan')}), "envelope"),
        (dict(method='lanczos', in_size=8, out_size=16,
              options={'sharpen': float('nan')}), "sharpen"),
        (dict(method='cubic', in_size=8, out_size=16,
              options={'cubic-b': float('inf')}), "cubic-b"),
    ])
    def test_build_fails_fast(self, kwargs, message):
        rs = Resampler(ResamplerConfig(**kwargs))
        with pytest.raises(ConfigurationError, match=message):
            rs.build()
        assert rs.state is HandleState.UNBUILT
        with pytest.raises(QueryMisuseError):
            rs.tap_count()

    @pytest.mark.parametrize("options", [[('envelope', 3.0)], 'envelope', 3])
    def test_options_must_be_mapping(self, options):
        with pytest.raises(ConfigurationError, match="mapping"):
            ResamplerConfig('lanczos', 8, 8, options=options)

    def test_none_options(self):
        assert dict(ResamplerConfig('sinc', 8, 8, options=None).options) == {}

    def test_non_finite_option_from_factory(self):
        with pytest.raises(ConfigurationError, match="finite"):
            create_resampler('lanczos', 8, 16,
                             options={'envelope': float('nan')})

    def test_matching_phase_count(self):
        rs = Resampler(ResamplerConfig('linear', 4, 8, n_phases=8))
        assert rs.build().out_size == 8

    def test_error_hierarchy(self):
        assert issubclass(ConfigurationError, TapgenError)
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(QueryMisuseError, TapgenError)
        assert issubclass(QueryMisuseError, RuntimeError)
        assert not issubclass(QueryMisuseError, ConfigurationError)


# ── Lifecycle ───────────────────────────────────────────────────────────


class TestLifecycle:

    def test_starts_unbuilt(self, config):
        rs = Resampler(config)
        assert rs.state is HandleState.UNBUILT
        assert not rs.is_built
        assert rs.config is config

    @pytest.mark.parametrize("query", [
        lambda rs: rs.tap_count(),
        lambda rs: rs.offset_at(0),
        lambda rs: rs.phase_at(0),
        lambda rs: rs.taps_at(0),
        lambda rs: rs.n_taps_at(0),
        lambda rs: rs.table,
        lambda rs: rs.selection,
    ])
    def test_query_before_build(self, config, query):
        with pytest.raises(QueryMisuseError, match="build"):
            query(Resampler(config))

    def test_build(self, config):
        rs = Resampler(config)
        table = rs.build()
        assert isinstance(table, TapTable)
        assert rs.state is HandleState.BUILT
        assert rs.is_built
        assert rs.table is table

    def test_build_once(self, built):
        with pytest.raises(QueryMisuseError, match="new Resampler"):
            built.build()

    def test_release(self, built):
        built.release()
        assert built.state is HandleState.RELEASED
        with pytest.raises(QueryMisuseError):
            built.offset_at(0)
        with pytest.raises(QueryMisuseError):
            built.build()

    def test_release_idempotent(self, built):
        built.release()
        built.release()
        assert built.state is HandleState.RELEASED

    def test_context_manager(self, config):
        with Resampler(config) as rs:
            rs.build()
            assert rs.tap_count() > 0
        assert rs.state is HandleState.RELEASED

    def test_repr(self, built):
        assert 'built' in repr(built)

    def test_degenerate_warning_points_at_caller(self):
        rs = Resampler(ResamplerConfig('lanczos', 1, 3,
                                       options={'sharpen': 1.0}))
        with pytest.warns(DegenerateKernelWarning) as record:
            rs.build()
        assert record[0].filename == __file__


# ── Queries ─────────────────────────────────────────────────────────────


class TestQueries:

    def test_values_match_table(self, built):
        table = built.table
        for j in range(table.out_size):
            assert built.offset_at(j) == table.offset[j]
            assert built.phase_at(j) == j
            assert built.n_taps_at(j) == built.tap_count()
            np.testing.assert_array_equal(built.taps_at(j), table.row(j))

    def test_python_ints(self, built):
        assert type(built.offset_at(3)) is int
        assert type(built.tap_count()) is int

    @pytest.mark.parametrize("j", [-1, 48, 1000])
    def test_index_out_of_range(self, built, j):
        with pytest.raises(IndexError):
            built.offset_at(j)
        with pytest.raises(IndexError):
            built.taps_at(j)

    def test_taps_read_only(self, built):
        with pytest.raises(ValueError):
            built.taps_at(0)[0] = 1.0

    def test_selection(self, built):
        sel = built.selection
        assert sel.method is ResamplerMethod.LANCZOS
        assert sel.max_taps == built.tap_count()


# ── Factory ─────────────────────────────────────────────────────────────


class TestCreateResampler:

    def test_returns_built(self):
        rs = create_resampler('linear', 2, 4)
        assert rs.is_built
        np.testing.assert_allclose(rs.taps_at(1), [0.75, 0.25])

    def test_enum_method(self):
        rs = create_resampler(ResamplerMethod.NEAREST, 6, 6)
        assert [rs.offset_at(j) for j in range(6)] == list(range(6))

    def test_cubic_fixed_taps(self):
        assert create_resampler('cubic', 40, 90, n_taps=9).tap_count() == 4

    def test_options(self):
        rs = create_resampler('sinc', 40, 40, n_taps=12,
                              options={'max-taps': 6, 'unused': 1})
        assert rs.tap_count() == 6

    def test_flags_do_not_change_table(self):
        plain = create_resampler('lanczos', 20, 30)
        flagged = create_resampler('lanczos', 20, 30,
                                   flags=ResamplerFlags.HALF_TAPS)
        assert flagged.config.flags is ResamplerFlags.HALF_TAPS
        np.testing.assert_array_equal(plain.table.taps, flagged.table.taps)
        np.testing.assert_array_equal(plain.table.offset,
                                      flagged.table.offset)

    def test_phase_count(self):
        rs = create_resampler('linear', 4, 8, n_phases=8)
        assert [rs.phase_at(j) for j in range(8)] == list(range(8))
        assert rs.config.n_phases == 8

    def test_phase_count_mismatch(self):
        with pytest.raises(ConfigurationError, match="n_phases"):
            create_resampler('linear', 4, 8, n_phases=5)

    def test_degenerate_warning_points_at_caller(self):
        with pytest.warns(DegenerateKernelWarning) as record:
            create_resampler('lanczos', 1, 3, options={'sharpen': 1.0})
        assert record[0].filename == __file__

    def test_numpy_shift(self):
        rs = create_resampler('nearest', 8, 8, shift=np.float64(1.0))
        assert rs.offset_at(2) == 1

    def test_package_exports(self):
        for name in tapgen.__all__:
            assert hasattr(tapgen, name)
