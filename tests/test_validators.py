from datetime import datetime

import pytest

from curvebuild.configuration import (
    CurveConstructionConfiguration,
    CurveDefinition,
    CurveGroupConfiguration,
    DiscountingCurveType,
    ExposureFunctions,
    IborCurveType,
    OvernightCurveType,
)
from curvebuild.exposure import CurrencyExposureFunction
from curvebuild.instruments import IborIndexSecurity, OvernightIndexSecurity
from curvebuild.schema import Currency, Tenor, ValidationOutcome
from curvebuild.settings import BuildSettings
from curvebuild.sources import InMemoryItemSource
from curvebuild.validation import (
    IborCurveReference,
    validate_configuration,
    validate_curve_group,
    validate_discounting_types,
    validate_exogenous_configurations,
    validate_exposure_functions,
    validate_ibor_curve_types,
    validate_ibor_securities,
    validate_overnight_curve_types,
)
from curvebuild.validation.report import IBOR_SECURITIES, discounting_key


def _config(name, types_for_curves, exogenous=()):
    return CurveConstructionConfiguration(
        name, [CurveGroupConfiguration(types_for_curves)], exogenous
    )


@pytest.fixture
def chained_source():
    deep = _config(
        "DEEP",
        {"DEEP-FF": [OvernightCurveType("USD-FEDFUNDS")]},
    )
    base = _config(
        "BASE",
        {"BASE-3M": [IborCurveType("USD-LIBOR-3M", "3M")]},
        exogenous=["DEEP"],
    )
    source = InMemoryItemSource()
    source.add("DEEP", deep)
    source.add("BASE", base)
    return source


def test_curve_group_resolves_definitions(usd_config, config_source):
    config_source.add("USD-3M", CurveDefinition("USD-3M", "alt"))
    result = validate_curve_group(usd_config.curve_groups[0], None, config_source)

    assert result.validated == (CurveDefinition("USD-OIS"),)
    assert result.duplicated_names == {"USD-3M"}


def test_curve_group_reports_wrong_kind_as_unsupported(usd_config):
    source = InMemoryItemSource()
    source.add("USD-OIS", usd_config)
    result = validate_curve_group(usd_config, None, source)

    assert result.unsupported == (usd_config,)
    assert result.missing_names == {"USD-3M"}


def test_curve_group_classifies_unhashable_items(usd_config, config_source):
    settings = BuildSettings()
    config_source.remove("USD-OIS", datetime(2026, 1, 1))
    config_source.add("USD-OIS", settings, datetime(2026, 1, 1))
    result = validate_curve_group(usd_config, None, config_source)

    assert result.unsupported == (settings,)
    assert result.outcomes["USD-OIS"] is ValidationOutcome.UNSUPPORTED
    assert result.validated == (CurveDefinition("USD-3M"),)


def test_curve_group_requires_source(usd_config):
    with pytest.raises(ValueError):
        validate_curve_group(usd_config, None, None)


def test_exogenous_configurations(chained_source):
    config = _config("TOP", {"TOP-OIS": [DiscountingCurveType("USD")]}, ["BASE", "NOPE"])
    result = validate_exogenous_configurations(config, None, chained_source)

    assert [c.name for c in result.validated] == ["BASE"]
    assert result.missing_names == {"NOPE"}


def test_exposure_functions_unknown_names_are_missing():
    functions = ExposureFunctions("USD", ["Currency", "Nope", "Currency"])
    result = validate_exposure_functions(functions)

    assert result.validated == (CurrencyExposureFunction(),)
    assert result.missing_names == {"Nope"}
    assert result.requested_names == ["Currency", "Nope"]


def test_discounting_types():
    group = CurveGroupConfiguration(
        {
            "USD-OIS": [DiscountingCurveType("USD")],
            "USD-OIS-2": [DiscountingCurveType("usd")],
            "EUR-OIS": [DiscountingCurveType("EUR")],
            "BAD": [DiscountingCurveType("U$D")],
        }
    )
    result = validate_discounting_types(group)

    assert result.validated == (Currency("EUR"),)
    assert result.duplicated_names == {"USD", "usd"}
    assert result.unsupported == ("U$D",)
    assert result.outcomes["U$D"] is ValidationOutcome.UNSUPPORTED


def test_discounting_reference_shared_by_types_of_one_curve_is_valid():
    group = CurveGroupConfiguration(
        {"USD-OIS": [DiscountingCurveType("USD"), DiscountingCurveType("USD")]}
    )
    assert validate_discounting_types(group).validated == (Currency("USD"),)


def test_ibor_securities():
    source = InMemoryItemSource()
    security = IborIndexSecurity("USD-LIBOR-3M", "USD LIBOR 3M", "USD-LIBOR-3M", "3M")
    source.add("USD-LIBOR-3M", security)
    source.add("USD-LIBOR-6M", OvernightIndexSecurity("USD-LIBOR-6M", "odd", "USD-FEDFUNDS"))

    result = validate_ibor_securities(
        ["USD-LIBOR-3M", "USD-LIBOR-6M", "USD-LIBOR-1M"], None, source
    )
    assert result.validated == (security,)
    assert result.names_for(ValidationOutcome.UNSUPPORTED) == ["USD-LIBOR-6M"]
    assert result.missing_names == {"USD-LIBOR-1M"}


def test_ibor_curve_types_duplicated_across_exogenous_chain(chained_source):
    config = _config(
        "TOP",
        {
            "USD-3M": [IborCurveType("USD-LIBOR-3M", "3M")],
            "USD-6M": [IborCurveType("USD-LIBOR-6M", "6M")],
        },
        exogenous=["BASE", "NOPE"],
    )
    result = validate_ibor_curve_types(config, None, chained_source)

    assert result.duplicated_names == {IborCurveReference("USD-LIBOR-3M", Tenor("3M"))}
    assert result.validated == (IborCurveReference("USD-LIBOR-6M", Tenor("6M")),)
    assert result.missing_names == {"NOPE"}


def test_ibor_reference_repeated_within_one_curve_counts_once():
    config = _config(
        "TOP",
        {
            "USD-3M": [
                IborCurveType("USD-LIBOR-3M", "3M"),
                IborCurveType("USD-LIBOR-3M", "3M"),
            ]
        },
    )
    result = validate_ibor_curve_types(config, None, InMemoryItemSource())
    assert result.is_valid


def test_overnight_curve_types_follow_nested_exogenous(chained_source):
    config = _config(
        "TOP",
        {"USD-FF": [OvernightCurveType("USD-FEDFUNDS")], "EUR-ESTR": [OvernightCurveType("EUR-ESTR")]},
        exogenous=["BASE"],
    )
    result = validate_overnight_curve_types(config, None, chained_source)

    assert result.duplicated_names == {"USD-FEDFUNDS"}
    assert result.validated == ("EUR-ESTR",)


def test_report_for_clean_configuration(usd_config, config_source, security_source):
    report = validate_configuration(usd_config, config_source, security_source=security_source)

    assert report.is_valid
    assert report.problems() == []
    # tolerated: dispatch falls back to the convention
    assert report.results[IBOR_SECURITIES].missing_names == {"USD-LIBOR-3M"}


def test_report_lists_problems(config_source):
    config = _config(
        "USD-2",
        {
            "USD-OIS": [DiscountingCurveType("USD")],
            "USD-OIS-2": [DiscountingCurveType("USD")],
        },
    )
    report = validate_configuration(config, config_source)

    assert not report.is_valid
    assert (discounting_key(0), "USD", ValidationOutcome.DUPLICATED) in report.problems()
    assert ("curve_definitions", "USD-OIS-2", ValidationOutcome.MISSING) in report.problems()

    frame = report.to_frame()
    assert list(frame.columns) == ["validator", "name", "outcome"]
    assert set(frame["validator"]) >= {"curve_definitions", discounting_key(0)}


def test_report_with_exposure_functions(usd_config, config_source):
    report = validate_configuration(
        usd_config,
        config_source,
        exposure_functions=ExposureFunctions("USD", ["Security Type", "Bogus"]),
    )
    assert not report.is_valid
    assert report.problems() == [("exposure_functions", "Bogus", ValidationOutcome.MISSING)]
