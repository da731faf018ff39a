from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

CustomerType = Literal["square", "sharp", "whale", "deadbeat"]
Side = Literal["home", "away"]
BetResult = Literal["win", "loss", "push"]
Severity = Literal["info", "win", "loss", "warning", "danger", "news"]
NewsCategory = Literal["injury", "return", "weather", "motivation", "rest"]
MissionType = Literal["collect", "recruit", "avoid_heat", "rest", "hedge", "scout", "schmooze", "fix_game"]
CollectionAction = Literal["let_slide", "pressure", "enforce", "cut_off"]

SEVERITIES: tuple[str, ...] = ("info", "win", "loss", "warning", "danger", "news")
COLLECTION_ACTIONS: tuple[str, ...] = ("let_slide", "pressure", "enforce", "cut_off")


def make_id(prefix: str, rng: random.Random) -> str:
    return f"{prefix}-{rng.getrandbits(40):010x}"


def other_side(side: str) -> Side:
    return "away" if side == "home" else "home"


@dataclass(frozen=True, slots=True)
class WinLoss:
    wins: int = 0
    losses: int = 0

    def __str__(self) -> str:
        return f"{self.wins}-{self.losses}"

    def add(self, won: bool) -> WinLoss:
        if won:
            return WinLoss(wins=self.wins + 1, losses=self.losses)
        return WinLoss(wins=self.wins, losses=self.losses + 1)


@dataclass(frozen=True, slots=True)
class Team:
    team_id: str
    city: str
    name: str
    abbreviation: str
    offense: int
    defense: int
    consistency: int
    record: WinLoss = WinLoss()
    home_record: WinLoss = WinLoss()
    away_record: WinLoss = WinLoss()
    streak: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.name}"

    @property
    def power_rating(self) -> float:
        return self.offense * 0.55 + self.defense * 0.45

    @property
    def streak_text(self) -> str:
        if self.streak == 0:
            return ""
        if self.streak > 0:
            return f"W{self.streak}"
        return f"L{abs(self.streak)}"


@dataclass(frozen=True, slots=True)
class TeamNews:
    team_id: str
    day: int
    category: NewsCategory
    impact: float
    headline: str
    is_revealed: bool = False


@dataclass(frozen=True, slots=True)
class Scheduled:
    kind: Literal["scheduled"] = "scheduled"


@dataclass(frozen=True, slots=True)
class Final:
    home_score: int
    away_score: int
    overtime: bool = False
    kind: Literal["final"] = "final"

    @property
    def winner(self) -> Side:
        return "home" if self.home_score > self.away_score else "away"


@dataclass(frozen=True, slots=True)
class Game:
    game_id: str
    week: int
    home_team_id: str
    away_team_id: str
    true_line: float
    market_line: float
    your_line: float
    news: tuple[TeamNews, ...] = ()
    status: Scheduled | Final = Scheduled()

    @property
    def is_complete(self) -> bool:
        return isinstance(self.status, Final)

    @property
    def home_score(self) -> int | None:
        return self.status.home_score if isinstance(self.status, Final) else None

    @property
    def away_score(self) -> int | None:
        return self.status.away_score if isinstance(self.status, Final) else None

    @property
    def revealed_news(self) -> tuple[TeamNews, ...]:
        return tuple(n for n in self.news if n.is_revealed)


@dataclass(frozen=True, slots=True)
class Customer:
    customer_id: str
    name: str
    customer_type: CustomerType
    bankroll: int
    max_bet: int
    reliability: float
    sharpness: float
    favorites_bias: float
    is_active: bool = True
    location: str | None = None


@dataclass(frozen=True, slots=True)
class Bet:
    bet_id: str
    customer_id: str
    game_id: str
    amount: int
    pick: Side
    line: float
    day_placed: int
    result: BetResult | None = None
    is_paid: bool = False


@dataclass(frozen=True, slots=True)
class Debt:
    customer_id: str
    amount: int
    week_incurred: int
    attempts: int = 0
    location: str = ""


@dataclass(frozen=True, slots=True)
class MissionReward:
    money: int = 0
    heat: int = 0
    energy: int = 0
    new_customer: CustomerType | None = None
    debt_collected: str | None = None
    hedge_game_id: str | None = None
    hedge_side: Side | None = None
    hedge_amount: int = 0
    hedge_line: float = 0.0
    fix_game_id: str | None = None
    fixed_outcome: Side | None = None
    reveal_market_lines: bool = False
    improve_customer_id: str | None = None


@dataclass(frozen=True, slots=True)
class Mission:
    mission_id: str
    mission_type: MissionType
    title: str
    description: str
    location: str
    energy_cost: int
    money_cost: int
    risk: float
    reward: MissionReward = MissionReward()
    failure_heat: int = 0


@dataclass(frozen=True, slots=True)
class LogEntry:
    entry_id: str
    week: int
    day: int
    message: str
    severity: Severity = "info"


@dataclass(frozen=True, slots=True)
class NonPayerPopup:
    customer_id: str
    customer_name: str
    amount: int


@dataclass(frozen=True, slots=True)
class Hedge:
    game_id: str
    side: Side
    amount: int
    line: float = 0.0


@dataclass(frozen=True, slots=True)
class FixedGame:
    game_id: str
    outcome: Side


@dataclass(frozen=True, slots=True)
class GameState:
    week: int
    day: int
    bankroll: int
    starting_bankroll: int
    energy: int
    max_energy: int
    heat: int
    teams: tuple[Team, ...]
    games: tuple[Game, ...]
    customers: tuple[Customer, ...]
    bets: tuple[Bet, ...] = ()
    debts: tuple[Debt, ...] = ()
    log: tuple[LogEntry, ...] = ()
    available_missions: tuple[Mission, ...] = ()
    actions_today: int = 0
    bets_received_today: bool = False
    is_game_over: bool = False
    game_over_reason: str | None = None
    pending_non_payer: NonPayerPopup | None = None
    has_scouted_this_week: bool = False
    hedges: tuple[Hedge, ...] = ()
    fixed_games: tuple[FixedGame, ...] = ()

    @property
    def hedged_game_ids(self) -> tuple[str, ...]:
        return tuple(h.game_id for h in self.hedges)

    @property
    def current_games(self) -> tuple[Game, ...]:
        return tuple(g for g in self.games if g.week == self.week)

    @property
    def active_customers(self) -> tuple[Customer, ...]:
        return tuple(c for c in self.customers if c.is_active)

    def team(self, team_id: str) -> Team | None:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def game(self, game_id: str) -> Game | None:
        for game in self.games:
            if game.game_id == game_id:
                return game
        return None

    def customer(self, customer_id: str) -> Customer | None:
        for customer in self.customers:
            if customer.customer_id == customer_id:
                return customer
        return None

    def debt_for(self, customer_id: str) -> Debt | None:
        for debt in self.debts:
            if debt.customer_id == customer_id:
                return debt
        return None

    def mission(self, mission_id: str) -> Mission | None:
        for mission in self.available_missions:
            if mission.mission_id == mission_id:
                return mission
        return None

    def fixed_outcome(self, game_id: str) -> Side | None:
        for fixed in self.fixed_games:
            if fixed.game_id == game_id:
                return fixed.outcome
        return None
