"""
Shared Domain Constants.

Central location for selection weights and timing defaults used across
domain services. Timing values are in seconds unless the name says otherwise.
"""

# =============================================================================
# Card Selection Weights
# =============================================================================
# Never-shown cards get a fixed dominant weight. Shown cards grow with the
# square root of hours since they were last seen. Cards younger than
# NEW_CARD_BONUS_DAYS get a multiplier decaying linearly from
# NEW_CARD_BONUS_MAX to 1.0 (shown cards only).

UNSEEN_CARD_WEIGHT = 100
MIN_CARD_WEIGHT = 1
NEW_CARD_BONUS_DAYS = 30
NEW_CARD_BONUS_MAX = 1.5

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


# =============================================================================
# Session Timing
# =============================================================================

TRANSITION_DELAY_MS = 200  # Lets the flip-back animation finish before a new card
TIP_ROTATION_SECONDS = 300  # 5 minutes, shared with background refresh
BACKGROUND_REFRESH_SECONDS = 300
SERVER_CANDIDATE_COUNT = 20


# =============================================================================
# Durable Storage Keys
# =============================================================================

VIEWED_CARDS_KEY = "viewedCards"


# =============================================================================
# Speech
# =============================================================================

TTS_LANGUAGE_CODE = "vi-VN"
TTS_VOICE_NAME = "vi-VN-Wavenet-A"
TTS_SSML_GENDER = "FEMALE"
TTS_AUDIO_ENCODING = "MP3"
TTS_PITCH = 0.0
TTS_SPEAKING_RATE = 0.9  # Slightly slower for learners
TTS_CACHE_SIZE = 200  # Synthesized clips kept in memory


# =============================================================================
# Background Imagery
# =============================================================================

BACKGROUND_QUERY = "vietnam"
BACKGROUND_ORIENTATION = "landscape"
