"""Finiquito Calc SDK - Settlement calculation and configuration."""

from .schemas import (
    CalculationType,
    EmployeeRecord,
    EconomicConfig,
    AdjustmentInputs,
    SeveranceSettings,
    SeveranceOverrides,
    PerceptionLine,
    PerceptionBreakdown,
    SeveranceComponent,
    SeveranceBreakdown,
    IsrComputation,
    SeveranceTax,
    TaxWithholding,
    SocialSecurityContribution,
    SettlementResult,
    BatchResult,
    normalize_calculation_type,
)

from .taxes import (
    TaxRules,
    REFERENCE_YEAR,
    load_tax_rules,
    BracketNotFoundError,
)

from .settlement import (
    compute_settlement,
    compute_batch,
)

from .roster import (
    parse_roster,
    load_roster,
    NoValidRecordsError,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    default_economic_config,
    load_economic_config,
    save_economic_config,
)

__all__ = [
    # Schemas
    "CalculationType",
    "EmployeeRecord",
    "EconomicConfig",
    "AdjustmentInputs",
    "SeveranceSettings",
    "SeveranceOverrides",
    "PerceptionLine",
    "PerceptionBreakdown",
    "SeveranceComponent",
    "SeveranceBreakdown",
    "IsrComputation",
    "SeveranceTax",
    "TaxWithholding",
    "SocialSecurityContribution",
    "SettlementResult",
    "BatchResult",
    "normalize_calculation_type",
    # Rules
    "TaxRules",
    "REFERENCE_YEAR",
    "load_tax_rules",
    "BracketNotFoundError",
    # Engine
    "compute_settlement",
    "compute_batch",
    # Roster ingestion
    "parse_roster",
    "load_roster",
    "NoValidRecordsError",
    # Configuration
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "default_economic_config",
    "load_economic_config",
    "save_economic_config",
]
