"""Host bridge: the calls the engine makes into the game client.

Implementations wrap whatever scripting API the client exposes. Every dispatch
returns True when the host accepted the action, which is not a guarantee that
it has been applied.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union

from autosustain.models import BuffStatus, PlayerSnapshot


class Host(Protocol):
    def get_snapshot(self) -> Union[PlayerSnapshot, dict]:
        """Current state; a dict is accepted and read with PlayerSnapshot.from_dict."""
        ...

    def has_item(self, item_id: int) -> bool: ...

    def has_item_equipped(self, slot: int, item_id: int) -> bool: ...

    def has_status_effect(self, effect_id: int) -> bool: ...

    def get_buff_status(self, buff_id: int) -> Optional[BuffStatus]: ...

    def dispatch_inventory_action(self, item_id: int) -> bool: ...

    def dispatch_equipped_action(self, slot: int, item_id: int) -> bool: ...
