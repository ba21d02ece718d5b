import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ParserSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OUTCOME_PARSER__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_parser: str = Field(default="junit", description="Parser used when no format is given")
    encoding: str = Field(default="utf-8", description="Encoding of report and source files")

    # TeamCity service message settings
    path_separator: str = Field(default=os.sep, description="Separator written into parsed file paths")
    teamcity_marker: str = Field(default="##teamcity", description="Prefix of service message lines")
    location_scheme: str = Field(default="php_qn://", description="Scheme stripped from location hints")

    report_format: str = Field(default="json", description="Default rendering format (json or yaml)")


def get_settings() -> ParserSettings:
    return ParserSettings()
