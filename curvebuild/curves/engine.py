"""
Curve build engine.

Resolves a named curve construction configuration, merges the bundles of its
exogenous configurations, calibrates each curve in declaration order and
assigns it the next free block of the shared Jacobian.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from curvebuild.configuration.construction import CurveConstructionConfiguration
from curvebuild.configuration.definitions import CurveDefinition
from curvebuild.exceptions import (
    ConfigurationNotFound,
    ConfigurationValidationError,
    CurveBuildError,
    MissingExogenousBundle,
)
from curvebuild.settings import BuildSettings
from curvebuild.sources.base import ItemSource, MarketDataSource
from curvebuild.validation.report import ConfigurationValidationReport, validate_configuration

from .base import Curve
from .blocks import CurveBuildingBlockBundle, CurveBuildingBlockBundleBuilder
from .bundle import FXMatrix, MulticurveBundle, MulticurveBundleBuilder
from .calibration import CalibratedCurve, ConstantCurveCalibrator, CurveCalibrator
from .dispatch import resolve_curve_type

logger = logging.getLogger(__name__)

ExogenousBundles = Mapping[str, Tuple[MulticurveBundle, CurveBuildingBlockBundle]]


@dataclass(frozen=True)
class BuildResult:
    """Aggregate output of :meth:`CurveBuildEngine.build`."""

    configuration_name: str
    multicurve_bundle: MulticurveBundle
    building_blocks: CurveBuildingBlockBundle
    curves: Mapping[str, Curve] = field(default_factory=dict)
    missing_outputs: Tuple[str, ...] = ()
    validation: Optional[ConfigurationValidationReport] = None

    def __iter__(self):
        yield self.multicurve_bundle
        yield self.building_blocks

    @property
    def unit_map(self) -> Dict[str, Tuple[int, int]]:
        return self.building_blocks.unit_map


class CurveBuildEngine:
    """Builds multicurve bundles and their building blocks from named configurations."""

    def __init__(
        self,
        config_source: ItemSource,
        convention_source: ItemSource,
        security_source: ItemSource,
        market_data_source: MarketDataSource,
        calibrator: Optional[CurveCalibrator] = None,
        settings: Optional[BuildSettings] = None,
    ):
        self.config_source = config_source
        self.convention_source = convention_source
        self.security_source = security_source
        self.market_data_source = market_data_source
        self.calibrator = calibrator or ConstantCurveCalibrator()
        self.settings = settings or BuildSettings()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------
    def build(
        self,
        name: str,
        as_of: Optional[datetime] = None,
        exogenous_bundles: Optional[ExogenousBundles] = None,
        requested_curves: Optional[Iterable[str]] = None,
        fx_matrix: Optional[FXMatrix] = None,
    ) -> BuildResult:
        """
        Build the multicurve bundle for a named configuration.

        Args:
            name: Curve construction configuration name
            as_of: Version instant for every lookup, None for latest
            exogenous_bundles: Already built (multicurve bundle, building
                blocks) pairs keyed by configuration name
            requested_curves: Curve names to return in ``BuildResult.curves``;
                every curve is still calibrated. Defaults to the
                configuration's own curves.
            fx_matrix: FX matrix of the resulting bundle

        Returns:
            BuildResult

        Raises:
            CurveBuildError: The build failed; nothing is returned
        """
        logger.info("Building curve construction configuration %s", name)
        try:
            result = self._build(name, as_of, exogenous_bundles or {}, requested_curves, fx_matrix)
        except CurveBuildError as exc:
            logger.error("Build of %s failed: %s", name, exc)
            raise
        logger.info(
            "Built %s: %d curves, %d Jacobian columns",
            name,
            len(result.building_blocks),
            result.building_blocks.total_size,
        )
        return result

    def _build(
        self,
        name: str,
        as_of: Optional[datetime],
        exogenous_bundles: ExogenousBundles,
        requested_curves: Optional[Iterable[str]],
        fx_matrix: Optional[FXMatrix],
    ) -> BuildResult:
        configuration = self._configuration(name, as_of)
        report = self._validate(configuration, as_of)

        blocks = CurveBuildingBlockBundleBuilder()
        multicurve = MulticurveBundleBuilder(fx_matrix)
        self._merge_exogenous(configuration, exogenous_bundles, blocks, multicurve)

        calibrated: Dict[str, Curve] = {}
        for group in configuration.curve_groups:
            for curve_name, curve_types in group.types_for_curves.items():
                result = self._calibrate(curve_name, as_of)
                blocks.add(curve_name, result.jacobian)
                for curve_type in curve_types:
                    target = resolve_curve_type(
                        curve_type, as_of, self.security_source, self.convention_source
                    )
                    multicurve.attach(curve_type.kind, target, result.curve)
                calibrated[curve_name] = result.curve

        bundle = multicurve.build()
        requested = (
            configuration.curve_names() if requested_curves is None else list(requested_curves)
        )
        curves, missing = self._select_outputs(configuration.name, requested, calibrated, bundle)
        return BuildResult(
            configuration_name=configuration.name,
            multicurve_bundle=bundle,
            building_blocks=blocks.build(),
            curves=curves,
            missing_outputs=missing,
            validation=report,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _configuration(self, name: str, as_of: Optional[datetime]) -> CurveConstructionConfiguration:
        try:
            configuration = self.config_source.get_single(
                CurveConstructionConfiguration, name, as_of
            )
        except (LookupError, ValueError) as exc:
            raise ConfigurationNotFound(name) from exc
        if configuration is None:
            raise ConfigurationNotFound(name)
        return configuration

    def _validate(
        self, configuration: CurveConstructionConfiguration, as_of: Optional[datetime]
    ) -> ConfigurationValidationReport:
        report = validate_configuration(
            configuration, self.config_source, as_of, security_source=self.security_source
        )
        if report.is_valid:
            return report
        if self.settings.strict_validation:
            raise ConfigurationValidationError(configuration.name, report)
        for validator, item, outcome in report.problems():
            logger.warning(
                "Configuration %s: %s %s is %s",
                configuration.name,
                validator,
                item,
                outcome.value,
            )
        return report

    @staticmethod
    def _merge_exogenous(
        configuration: CurveConstructionConfiguration,
        exogenous_bundles: ExogenousBundles,
        blocks: CurveBuildingBlockBundleBuilder,
        multicurve: MulticurveBundleBuilder,
    ) -> None:
        for exogenous_name in configuration.exogenous_configurations:
            if exogenous_name not in exogenous_bundles:
                raise MissingExogenousBundle(exogenous_name)
            exogenous_multicurve, exogenous_blocks = exogenous_bundles[exogenous_name]
            blocks.merge(exogenous_blocks)
            multicurve.merge(exogenous_multicurve)
            logger.debug(
                "Merged exogenous configuration %s into %s",
                exogenous_name,
                configuration.name,
            )

    def _calibrate(self, curve_name: str, as_of: Optional[datetime]) -> CalibratedCurve:
        definition = self.config_source.get_single(CurveDefinition, curve_name, as_of)
        if definition is None:
            definition = CurveDefinition(curve_name)
        market_data = self.market_data_source.data_point(definition.data_id)
        result = self.calibrator.calibrate(curve_name, definition, market_data, as_of)
        logger.log(
            logging.INFO if self.settings.verbose else logging.DEBUG,
            "Calibrated curve %s from %s = %s",
            curve_name,
            definition.data_id,
            market_data,
        )
        return result

    @staticmethod
    def _select_outputs(
        configuration_name: str,
        requested: Sequence[str],
        calibrated: Mapping[str, Curve],
        bundle: MulticurveBundle,
    ) -> Tuple[Dict[str, Curve], Tuple[str, ...]]:
        curves: Dict[str, Curve] = {}
        missing = []
        for curve_name in requested:
            curve = calibrated.get(curve_name) or bundle.curve(curve_name)
            if curve is None:
                logger.warning(
                    "Could not get curve called %s from configuration %s",
                    curve_name,
                    configuration_name,
                )
                missing.append(curve_name)
            else:
                curves[curve_name] = curve
        return curves, tuple(missing)


def build(
    name: str,
    config_source: ItemSource,
    convention_source: ItemSource,
    security_source: ItemSource,
    market_data_source: MarketDataSource,
    as_of: Optional[datetime] = None,
    exogenous_bundles: Optional[ExogenousBundles] = None,
    requested_curves: Optional[Iterable[str]] = None,
    settings: Optional[BuildSettings] = None,
    calibrator: Optional[CurveCalibrator] = None,
    fx_matrix: Optional[FXMatrix] = None,
) -> BuildResult:
    """Convenience wrapper building one configuration with a one-off engine.

    The constant calibrator is used unless another one is given.
    """
    engine = CurveBuildEngine(
        config_source,
        convention_source,
        security_source,
        market_data_source,
        calibrator=calibrator,
        settings=settings,
    )
    return engine.build(name, as_of, exogenous_bundles, requested_curves, fx_matrix)
