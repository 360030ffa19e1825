# modules/srs/config.py


class SrsDefaultConfig:
    """Constants of the simplified SM-2 scheduler."""
    SRS_DEFAULT_EASE_FACTOR = 2.5
    SRS_MIN_EASE_FACTOR = 1.3

    # Interval ladder in days
    SRS_FIRST_INTERVAL_DAYS = 1      # first successful review (interval 0 -> 1)
    SRS_SECOND_INTERVAL_DAYS = 3     # second successful review (interval 1 -> 3)
    SRS_LAPSE_INTERVAL_DAYS = 1      # "Forgot" always resets to this
