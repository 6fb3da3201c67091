from pydantic_settings import BaseSettings, SettingsConfigDict


class ReminderSettings(BaseSettings):
    # Due-check polling
    POLL_INTERVAL_SECONDS: float = 30.0

    # Alert tone repeated while a reminder is due
    ALERT_INTERVAL_SECONDS: float = 1.2
    ALERT_TONE_FREQUENCY_HZ: float = 800.0
    ALERT_TONE_DURATION_SECONDS: float = 0.2
    ALERT_TONE_GAIN: float = 0.5
    ALERT_TONE_WAVEFORM: str = "sine"

    # Metrics
    METRICS_ENABLED: bool = True

    model_config = SettingsConfigDict(env_prefix="REMINDER_", env_file=".env", extra="ignore")


settings = ReminderSettings()
