"""
League Team ID Constants

Readable constants for the 32 numerical team IDs plus the conference and
division alignment every standings and seeding routine depends on.

Example:
    from constants.team_ids import TeamIDs

    TeamIDs.get_division_teams("AFC", "North")  # [5, 6, 7, 8]
"""

from typing import Dict, List, Tuple


AFC = "AFC"
NFC = "NFC"
CONFERENCES: Tuple[str, str] = (AFC, NFC)
DIVISION_NAMES: Tuple[str, ...] = ("East", "North", "South", "West")


class TeamIDs:
    """Constants for team numerical IDs (AFC 1-16, NFC 17-32)"""

    # AFC East
    BUFFALO_BILLS = 1
    MIAMI_DOLPHINS = 2
    NEW_ENGLAND_PATRIOTS = 3
    NEW_YORK_JETS = 4

    # AFC North
    BALTIMORE_RAVENS = 5
    CINCINNATI_BENGALS = 6
    CLEVELAND_BROWNS = 7
    PITTSBURGH_STEELERS = 8

    # AFC South
    HOUSTON_TEXANS = 9
    INDIANAPOLIS_COLTS = 10
    JACKSONVILLE_JAGUARS = 11
    TENNESSEE_TITANS = 12

    # AFC West
    DENVER_BRONCOS = 13
    KANSAS_CITY_CHIEFS = 14
    LAS_VEGAS_RAIDERS = 15
    LOS_ANGELES_CHARGERS = 16

    # NFC East
    DALLAS_COWBOYS = 17
    NEW_YORK_GIANTS = 18
    PHILADELPHIA_EAGLES = 19
    WASHINGTON_COMMANDERS = 20

    # NFC North
    CHICAGO_BEARS = 21
    DETROIT_LIONS = 22
    GREEN_BAY_PACKERS = 23
    MINNESOTA_VIKINGS = 24

    # NFC South
    ATLANTA_FALCONS = 25
    CAROLINA_PANTHERS = 26
    NEW_ORLEANS_SAINTS = 27
    TAMPA_BAY_BUCCANEERS = 28

    # NFC West
    ARIZONA_CARDINALS = 29
    LOS_ANGELES_RAMS = 30
    SAN_FRANCISCO_49ERS = 31
    SEATTLE_SEAHAWKS = 32

    @classmethod
    def get_all_team_ids(cls) -> List[int]:
        """All valid team IDs in ascending order"""
        return sorted(getattr(cls, attr) for attr in dir(cls)
                      if attr.isupper() and isinstance(getattr(cls, attr), int))

    @classmethod
    def get_division_teams(cls, conference: str, division: str) -> List[int]:
        """
        Get team IDs for a division.

        Args:
            conference: "AFC" or "NFC"
            division: "East", "North", "South" or "West"

        Returns:
            Team IDs in that division, empty if the name is unknown
        """
        return list(NFL_DIVISIONS.get(conference.upper(), {}).get(division.title(), []))

    @classmethod
    def get_conference_teams(cls, conference: str) -> List[int]:
        """Team IDs for a conference (AFC or NFC), division by division."""
        divisions = NFL_DIVISIONS.get(conference.upper(), {})
        return [team_id for name in DIVISION_NAMES for team_id in divisions.get(name, [])]


NFL_DIVISIONS: Dict[str, Dict[str, List[int]]] = {
    AFC: {
        "East": [1, 2, 3, 4],
        "North": [5, 6, 7, 8],
        "South": [9, 10, 11, 12],
        "West": [13, 14, 15, 16],
    },
    NFC: {
        "East": [17, 18, 19, 20],
        "North": [21, 22, 23, 24],
        "South": [25, 26, 27, 28],
        "West": [29, 30, 31, 32],
    },
}


# team_id -> (city, nickname, abbreviation)
TEAM_INFO: Dict[int, Tuple[str, str, str]] = {
    1: ("Buffalo", "Bills", "BUF"),
    2: ("Miami", "Dolphins", "MIA"),
    3: ("New England", "Patriots", "NE"),
    4: ("New York", "Jets", "NYJ"),
    5: ("Baltimore", "Ravens", "BAL"),
    6: ("Cincinnati", "Bengals", "CIN"),
    7: ("Cleveland", "Browns", "CLE"),
    8: ("Pittsburgh", "Steelers", "PIT"),
    9: ("Houston", "Texans", "HOU"),
    10: ("Indianapolis", "Colts", "IND"),
    11: ("Jacksonville", "Jaguars", "JAX"),
    12: ("Tennessee", "Titans", "TEN"),
    13: ("Denver", "Broncos", "DEN"),
    14: ("Kansas City", "Chiefs", "KC"),
    15: ("Las Vegas", "Raiders", "LV"),
    16: ("Los Angeles", "Chargers", "LAC"),
    17: ("Dallas", "Cowboys", "DAL"),
    18: ("New York", "Giants", "NYG"),
    19: ("Philadelphia", "Eagles", "PHI"),
    20: ("Washington", "Commanders", "WAS"),
    21: ("Chicago", "Bears", "CHI"),
    22: ("Detroit", "Lions", "DET"),
    23: ("Green Bay", "Packers", "GB"),
    24: ("Minnesota", "Vikings", "MIN"),
    25: ("Atlanta", "Falcons", "ATL"),
    26: ("Carolina", "Panthers", "CAR"),
    27: ("New Orleans", "Saints", "NO"),
    28: ("Tampa Bay", "Buccaneers", "TB"),
    29: ("Arizona", "Cardinals", "ARI"),
    30: ("Los Angeles", "Rams", "LAR"),
    31: ("San Francisco", "49ers", "SF"),
    32: ("Seattle", "Seahawks", "SEA"),
}


def get_team_alignment(team_id: int) -> Tuple[str, str]:
    """
    Look up a team's (conference, division).

    Raises:
        KeyError: If team_id is not part of the league
    """
    for conference, divisions in NFL_DIVISIONS.items():
        for division, team_ids in divisions.items():
            if team_id in team_ids:
                return conference, division
    raise KeyError(f"Unknown team_id: {team_id}")
