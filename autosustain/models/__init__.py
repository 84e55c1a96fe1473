from autosustain.models.actions import (
    ELVEN_SHARD,
    EXCALIBUR,
    ActionKind,
    FiredAction,
    ItemLocation,
    SpecialItem,
)
from autosustain.models.buffs import (
    BuffDecision,
    BuffOutcome,
    BuffPhase,
    BuffRule,
    BuffStatus,
)
from autosustain.models.config import (
    DynamicOverride,
    EngineConfig,
    Override,
    StaticOverride,
    as_override,
)
from autosustain.models.consumables import (
    CategoryRule,
    ConsumableCategory,
    ConsumableItem,
    MatchMode,
    default_health_rules,
    default_prayer_rules,
)
from autosustain.models.state import (
    EMPTY_SLOT_ID,
    UNKNOWN_LOCATION,
    Coords,
    InventorySlot,
    Metric,
    PlayerSnapshot,
)
from autosustain.models.thresholds import (
    CRITICAL,
    NORMAL,
    SPECIAL,
    ConfigError,
    ThresholdKind,
    ThresholdSet,
    ThresholdTier,
)
