from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    snap_threshold_deg: float = 0.3
    ease_factor: float = 0.18
    frame_interval_s: float = 1 / 60
    needle_gradient: tuple[str, str] = ("#6EE7B7", "#3B82F6")

    model_config = {"env_file": ".env", "env_prefix": "COMPASS_"}


settings = Settings()
