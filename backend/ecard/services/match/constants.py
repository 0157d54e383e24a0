# Card kinds
EMPEROR = 'emperor'
CITIZEN = 'citizen'
SLAVE = 'slave'
CARD_KINDS = (EMPEROR, CITIZEN, SLAVE)

# Base roles, in the order they are handed out when no role is requested
ROLES = (EMPEROR, SLAVE)

MAX_PLAYERS = 2
CITIZENS_PER_HAND = 4

# Match arc
TOTAL_GAMES = 12
GAMES_PER_SEGMENT = 3
MAX_TURNS = 5

# Points for winning a game, keyed by the winner's role in that game
POINTS_BY_ROLE = {EMPEROR: 1, SLAVE: 5}
