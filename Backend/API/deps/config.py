import os
from dotenv import load_dotenv

from services.payout import Paytable, load_paytable

load_dotenv()
PLINKO_ROWS = int(os.getenv("PLINKO_ROWS", "12"))
SERVER_SEED_BYTES = int(os.getenv("SERVER_SEED_BYTES", "32"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# built once; a bad override fails at import instead of mid-round
PAYTABLE = load_paytable(PLINKO_ROWS, os.getenv("PLINKO_PAYTABLE"))


def get_paytable() -> Paytable:
    return PAYTABLE
