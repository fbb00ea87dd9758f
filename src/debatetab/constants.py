# Debate Tab
# Copyright (C) 2025  Debate Tab developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
LOG_LEVEL_ENV_VAR = "DEBATETAB_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# Sides
SIDE_AFF = "aff"
SIDE_NEG = "neg"
SIDES = (SIDE_AFF, SIDE_NEG)

# Ballot winner values (a bye is recorded as its own winner value)
WINNER_BYE = "bye"
BALLOT_WINNERS = (SIDE_AFF, SIDE_NEG, WINNER_BYE)

# Round outcome categories, from the competitor's point of view
OUTCOME_WIN = "win"
OUTCOME_LOSS = "loss"
OUTCOME_BYE = "bye"
OUTCOME_FORFEIT_GIVEN = "forfeit_given"  # Competitor forfeited (counts as a loss)
OUTCOME_FORFEIT_RECEIVED = "forfeit_received"  # Opponent forfeited (counts as a win)
OUTCOME_PENDING = "pending"  # No finalized ballot yet
OUTCOMES = (
    OUTCOME_WIN,
    OUTCOME_LOSS,
    OUTCOME_BYE,
    OUTCOME_FORFEIT_GIVEN,
    OUTCOME_FORFEIT_RECEIVED,
    OUTCOME_PENDING,
)

# Tiebreaker Keys
TB_WINS = "wins"
TB_LOSSES = "losses"
TB_SPEAKS = "speaks"
TB_RANKS = "ranks"
TB_ADJUSTED_SPEAKS = "adjusted_speaks"
TB_ADJUSTED_RANKS = "adjusted_ranks"
TB_DOUBLE_ADJUSTED_SPEAKS = "double_adjusted_speaks"
TB_DOUBLE_ADJUSTED_RANKS = "double_adjusted_ranks"
TB_OPP_WINS = "opp_wins"
TB_OPP_WIN_PCT = "opp_win_pct"
TB_HEAD_TO_HEAD = "head_to_head"
TB_COIN_FLIP = "coin_flip"

TIEBREAKER_TYPES = (
    TB_WINS,
    TB_LOSSES,
    TB_SPEAKS,
    TB_RANKS,
    TB_ADJUSTED_SPEAKS,
    TB_ADJUSTED_RANKS,
    TB_DOUBLE_ADJUSTED_SPEAKS,
    TB_DOUBLE_ADJUSTED_RANKS,
    TB_OPP_WINS,
    TB_OPP_WIN_PCT,
    TB_HEAD_TO_HEAD,
    TB_COIN_FLIP,
)

# Numeric criteria: tiebreaker key -> (standing field, higher value ranks first)
NUMERIC_TIEBREAKER_FIELDS = {
    TB_WINS: ("wins", True),
    TB_LOSSES: ("losses", False),
    TB_SPEAKS: ("total_speaks", True),
    TB_RANKS: ("total_ranks", False),  # 1 = best
    TB_ADJUSTED_SPEAKS: ("adjusted_speaks", True),
    TB_ADJUSTED_RANKS: ("adjusted_ranks", False),
    TB_DOUBLE_ADJUSTED_SPEAKS: ("double_adjusted_speaks", True),
    TB_DOUBLE_ADJUSTED_RANKS: ("double_adjusted_ranks", False),
    TB_OPP_WINS: ("opp_wins", True),
    TB_OPP_WIN_PCT: ("opp_win_pct", True),
}

# Default display names for tiebreakers
TIEBREAKER_LABELS = {
    TB_WINS: "Wins",
    TB_LOSSES: "Losses",
    TB_SPEAKS: "Speaker Points",
    TB_RANKS: "Speaker Ranks",
    TB_ADJUSTED_SPEAKS: "Adjusted Speaks",
    TB_ADJUSTED_RANKS: "Adjusted Ranks",
    TB_DOUBLE_ADJUSTED_SPEAKS: "Double Adjusted Speaks",
    TB_DOUBLE_ADJUSTED_RANKS: "Double Adjusted Ranks",
    TB_OPP_WINS: "Opponent Wins",
    TB_OPP_WIN_PCT: "Opponent Win %",
    TB_HEAD_TO_HEAD: "Head-to-Head",
    TB_COIN_FLIP: "Coin Flip",
}

# Default order used for sorting if not configured otherwise
DEFAULT_TIEBREAKER_ORDER = [
    TB_WINS,
    TB_SPEAKS,
    TB_ADJUSTED_SPEAKS,
    TB_OPP_WINS,
    TB_HEAD_TO_HEAD,
    TB_COIN_FLIP,
]

# name -> (description, order)
TIEBREAKER_PRESETS = {
    "Standard": (
        "Win/Loss -> Speaks -> Ranks -> Adjusted -> Opponent Strength",
        [
            TB_WINS,
            TB_SPEAKS,
            TB_RANKS,
            TB_ADJUSTED_SPEAKS,
            TB_ADJUSTED_RANKS,
            TB_OPP_WINS,
            TB_HEAD_TO_HEAD,
            TB_COIN_FLIP,
        ],
    ),
    "Speaks-First": (
        "Speaks -> Win/Loss -> Ranks (rewards good speaking)",
        [TB_SPEAKS, TB_WINS, TB_RANKS, TB_OPP_WINS, TB_HEAD_TO_HEAD, TB_COIN_FLIP],
    ),
    "NCFCA Standard": (
        "Traditional NCFCA tiebreaker order",
        [
            TB_WINS,
            TB_SPEAKS,
            TB_RANKS,
            TB_ADJUSTED_SPEAKS,
            TB_ADJUSTED_RANKS,
            TB_OPP_WINS,
            TB_COIN_FLIP,
        ],
    ),
    "Opponent-Weighted": (
        "Emphasizes opponent strength (rewards tough schedules)",
        [TB_WINS, TB_OPP_WIN_PCT, TB_SPEAKS, TB_HEAD_TO_HEAD, TB_COIN_FLIP],
    ),
}

# Drop counts for adjusted values (per end)
DEFAULT_DROP_COUNT = 1
DOUBLE_DROP_COUNT = 2

# Speaker awards
DEFAULT_TOP_SPEAKERS = 10
