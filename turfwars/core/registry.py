"""Player registry: id -> Player, insertion ordered"""
import logging
from typing import Dict, Iterable, List

from turfwars.core.leaderboard import derive_status
from turfwars.exceptions import DuplicatePlayerError, UnknownPlayerError
from turfwars.models import Player


logger = logging.getLogger(__name__)


class PlayerRegistry:
    """
    Canonical store of the session's players.

    Player ids are unique and never change. Status labels are rewritten by
    apply_statuses() whenever membership or scores change.
    """

    def __init__(self, players: Iterable[Player] = ()) -> None:
        self._players: Dict[str, Player] = {}
        for player in players:
            self._insert(player)
        self.apply_statuses()

    def _insert(self, player: Player) -> None:
        if player.id in self._players:
            raise DuplicatePlayerError(player.id)
        self._players[player.id] = player

    def add(self, player: Player) -> None:
        self._insert(player)
        self.apply_statuses()
        logger.info(f"👤 Registered player {player.id} ({player.name})")

    def get(self, player_id: str) -> Player:
        """Live reference to a player; raises UnknownPlayerError"""
        player = self._players.get(player_id)
        if player is None:
            raise UnknownPlayerError(player_id)
        return player

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._players

    def __len__(self) -> int:
        return len(self._players)

    def players(self) -> List[Player]:
        """Live players in insertion order (callers must not mutate)"""
        return list(self._players.values())

    def copy_players(self) -> List[Player]:
        """Deep copies of all players in insertion order"""
        return [p.model_copy(deep=True) for p in self._players.values()]

    def set_color(self, player_id: str, color: str) -> Player:
        player = self.get(player_id)
        player.color = color
        return player

    def apply_statuses(self) -> None:
        """Recompute every player's status from the current scores"""
        statuses = derive_status(list(self._players.values()))
        for player_id, status in statuses.items():
            self._players[player_id].status = status
