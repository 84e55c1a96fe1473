from autosustain.automation.buff_manager import BuffManager
from autosustain.automation.consumption import (
    HEALTH_CASCADE,
    PRAYER_CASCADE,
    CascadeStep,
    run_cascade,
)
from autosustain.automation.cooldowns import CooldownTracker
from autosustain.automation.engine import ManagementOutcome, SustainEngine, TickReport
from autosustain.automation.host import Host
from autosustain.automation.special_items import Possession, find_special, try_use_special
