"""
Engine Configuration
====================
Uses pydantic-settings to load environment variables into a typed Settings object.
Nothing here changes the formulas themselves. Settings only pick defaults
(training level, activity level) and which 9-site formula the dispatcher uses.
"""

import logging

from pydantic_settings import BaseSettings

from bodycomp.core.enums import ActivityLevel, NineSiteFormula, TrainingLevel


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.
    The .env file is automatically read thanks to the model_config below.
    """

    # Engine metadata
    APP_NAME: str = "Body Composition Engine"
    APP_VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Defaults applied when a measurement omits them
    DEFAULT_TRAINING_LEVEL: TrainingLevel = TrainingLevel.INTERMEDIATE
    DEFAULT_ACTIVITY_LEVEL: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE

    # SKINFOLD_9_SITE is wired to Durnin-Womersley; Parillo is the alternative
    NINE_SITE_FORMULA: NineSiteFormula = NineSiteFormula.DURNIN_WOMERSLEY

    model_config = {"env_file": ".env", "extra": "ignore"}


# Singleton instance, import this everywhere you need settings
settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger for applications embedding the engine.

    The engine modules only create named loggers; calling this is optional and
    left to whoever owns the process (a web app, a script, a notebook).
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
