
BDDK_URL = "https://www.bddk.org.tr/Mevzuat/DokumanGetir/1164"

DISCLAIMER = (
    "Loan ratios follow the BDDK housing loan schedule for second-hand and new houses. "
    "Results are estimates only; the lending bank's own assessment, fees and insurance "
    "costs are not included."
)

# Tier tables are (upper bound, loan percentage) pairs.  Bounds are exclusive
# and a ``None`` bound marks the open-ended top tier.
SECONDHAND_TIERS = [(1_000_000, 0.90), (2_000_000, 0.60), (None, 0.50)]
NEW_HOUSE_TIERS = [(5_000_000, 0.80), (10_000_000, 0.70), (20_000_000, 0.60), (None, 0.50)]

MAX_LOAN = 2_500_000  # second-hand only
SECONDHAND_NO_LOAN_THRESHOLD = 10_000_000

LOAN_TERM_YEARS = 10
MONTHLY_INTEREST_RATE = 0.0265  # 2.65% per month, applied directly
