"""
Game state health checker for the chip engine.

This module validates GameState values against the accounting invariants
(chip conservation, pot sums, pot eligibility) and basic table constraints.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass
from enum import Enum

from .enums import GameStage, PlayerStatus, COMMUNITY_CARDS_BY_STAGE
from .state import GameState


class HealthIssueType(Enum):
    """Types of health issues that can be detected."""
    CHIP_CONSERVATION_VIOLATION = "chip_conservation_violation"
    NEGATIVE_AMOUNT = "negative_amount"
    INVALID_POT_AMOUNT = "invalid_pot_amount"
    INELIGIBLE_POT_PLAYER = "ineligible_pot_player"
    INVALID_SEAT_INDEX = "invalid_seat_index"
    INVALID_CURRENT_PLAYER = "invalid_current_player"
    INVALID_COMMUNITY_CARDS = "invalid_community_cards"


class HealthIssueSeverity(Enum):
    """Severity levels for health issues."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class HealthIssue:
    """Represents a health issue found during validation.

    Attributes:
        issue_type: The type of issue detected.
        severity: The severity level of the issue.
        message: Human-readable description of the issue.
        details: Additional details about the issue.
    """
    issue_type: HealthIssueType
    severity: HealthIssueSeverity
    message: str
    details: Dict[str, Any]


@dataclass
class HealthCheckResult:
    """Result of a health check operation."""
    is_healthy: bool
    issues: List[HealthIssue]
    summary: Dict[str, Any]

    def issues_of_type(self, issue_type: HealthIssueType) -> List[HealthIssue]:
        return [i for i in self.issues if i.issue_type == issue_type]


class GameStateHealthChecker:
    """Health checker for game states.

    A state is healthy when no CRITICAL issue is found. Warnings describe
    states the engine can reach but that a host should look at.
    """

    def __init__(self, expected_total_chips: Optional[int] = None):
        """Initialize the health checker.

        Args:
            expected_total_chips: Expected chips in the system (stacks plus
                uncollected pot). If None, conservation is not validated.
        """
        self.expected_total_chips = expected_total_chips

    @classmethod
    def for_state(cls, state: GameState) -> 'GameStateHealthChecker':
        """Build a checker that expects the chip total of ``state``."""
        return cls(expected_total_chips=state.total_chips())

    def check_health(self, state: GameState) -> HealthCheckResult:
        """Perform a comprehensive health check on a game state.

        Args:
            state: The game state to check.

        Returns:
            Health check result with any issues found.
        """
        issues = []
        issues.extend(self._check_chip_conservation(state))
        issues.extend(self._check_negative_amounts(state))
        issues.extend(self._check_pot_amount(state))
        issues.extend(self._check_pot_eligibility(state))
        issues.extend(self._check_seat_indices(state))
        issues.extend(self._check_current_player(state))
        issues.extend(self._check_community_cards(state))

        critical_issues = [i for i in issues if i.severity == HealthIssueSeverity.CRITICAL]

        summary = {
            "total_issues": len(issues),
            "critical_issues": len(critical_issues),
            "warning_issues": len([i for i in issues if i.severity == HealthIssueSeverity.WARNING]),
            "checked_at_stage": state.stage.value,
            "total_players": len(state.players),
            "active_players": len(state.get_active_players()),
            "total_chips": state.total_chips(),
        }

        return HealthCheckResult(
            is_healthy=not critical_issues,
            issues=issues,
            summary=summary,
        )

    def _check_chip_conservation(self, state: GameState) -> List[HealthIssue]:
        if self.expected_total_chips is None:
            return []

        actual_total = state.total_chips()
        if actual_total == self.expected_total_chips:
            return []

        return [HealthIssue(
            issue_type=HealthIssueType.CHIP_CONSERVATION_VIOLATION,
            severity=HealthIssueSeverity.CRITICAL,
            message=f"Chip conservation violated: expected {self.expected_total_chips}, got {actual_total}",
            details={
                "expected_total": self.expected_total_chips,
                "actual_total": actual_total,
                "difference": actual_total - self.expected_total_chips,
            },
        )]

    def _check_negative_amounts(self, state: GameState) -> List[HealthIssue]:
        issues = []
        for player in state.players:
            if player.chips < 0 or player.current_bet < 0:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.NEGATIVE_AMOUNT,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"Player {player.id} has a negative chip or bet amount",
                    details={"player_id": player.id, "chips": player.chips, "current_bet": player.current_bet},
                ))
        if state.current_bet < 0 or state.total_pot < 0:
            issues.append(HealthIssue(
                issue_type=HealthIssueType.NEGATIVE_AMOUNT,
                severity=HealthIssueSeverity.CRITICAL,
                message="Table bet or pot total is negative",
                details={"current_bet": state.current_bet, "total_pot": state.total_pot},
            ))
        return issues

    def _check_pot_amount(self, state: GameState) -> List[HealthIssue]:
        """Accumulated pots plus in-flight bets must add up to the pot total."""
        collected = sum(p.amount for p in state.pots)
        in_flight = sum(p.current_bet for p in state.players)
        if collected + in_flight == state.total_pot:
            return []

        return [HealthIssue(
            issue_type=HealthIssueType.INVALID_POT_AMOUNT,
            severity=HealthIssueSeverity.CRITICAL,
            message=f"Pots ({collected}) plus bets ({in_flight}) do not match pot total {state.total_pot}",
            details={"collected": collected, "in_flight": in_flight, "total_pot": state.total_pot},
        )]

    def _check_pot_eligibility(self, state: GameState) -> List[HealthIssue]:
        issues = []
        statuses = {p.id: p.status for p in state.players}
        for index, pot in enumerate(state.pots):
            for player_id in pot.eligible_players:
                status = statuses.get(player_id)
                if status is None or status in (PlayerStatus.FOLDED, PlayerStatus.OUT):
                    issues.append(HealthIssue(
                        issue_type=HealthIssueType.INELIGIBLE_POT_PLAYER,
                        severity=HealthIssueSeverity.CRITICAL,
                        message=f"Pot {index} lists player {player_id} who cannot win it",
                        details={"pot_index": index, "player_id": player_id,
                                 "status": status.value if status else None},
                    ))
        return issues

    def _check_seat_indices(self, state: GameState) -> List[HealthIssue]:
        issues = []
        count = len(state.players)
        seats = {
            "current_player_index": state.current_player_index,
            "dealer_button_index": state.dealer_button_index,
            "small_blind_index": state.small_blind_index,
            "big_blind_index": state.big_blind_index,
        }
        for name, value in seats.items():
            if not 0 <= value < count:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.INVALID_SEAT_INDEX,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"{name} {value} is out of range for {count} players",
                    details={"field": name, "value": value, "player_count": count},
                ))
        return issues

    def _check_current_player(self, state: GameState) -> List[HealthIssue]:
        if not state.is_betting_stage:
            return []
        player = state.get_current_player()
        if player is None or player.is_active:
            return []

        return [HealthIssue(
            issue_type=HealthIssueType.INVALID_CURRENT_PLAYER,
            severity=HealthIssueSeverity.WARNING,
            message=f"Current player {player.id} is not active ({player.status.value})",
            details={"player_id": player.id, "status": player.status.value},
        )]

    def _check_community_cards(self, state: GameState) -> List[HealthIssue]:
        if state.stage == GameStage.GAME_OVER:
            return []

        if state.stage == GameStage.PRE_FLOP:
            expected = 0
        elif state.stage == GameStage.SHOWDOWN:
            expected = 5
        else:
            expected = COMMUNITY_CARDS_BY_STAGE[state.stage]

        if state.community_cards == expected:
            return []

        return [HealthIssue(
            issue_type=HealthIssueType.INVALID_COMMUNITY_CARDS,
            severity=HealthIssueSeverity.WARNING,
            message=f"Stage {state.stage.value} should show {expected} community cards, not {state.community_cards}",
            details={"expected": expected, "actual": state.community_cards},
        )]
