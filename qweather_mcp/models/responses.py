"""
Shapes of the QWeather response bodies the tools read.

Only the fields that end up in the rendered text are modelled. Upstream
sends every value as a string; numbers are coerced and nulls or absent
fields become empty strings so a sparse record still renders.
"""
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

Text = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


class UpstreamModel(BaseModel):
    """Base for upstream payloads: camelCase on the wire, extra fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class WeatherNow(UpstreamModel):
    obs_time: Text = ""
    temp: Text = ""
    feels_like: Text = ""
    text: Text = ""
    wind_dir: Text = ""
    wind_scale: Text = ""


class WeatherNowResponse(UpstreamModel):
    now: Optional[WeatherNow] = None


class HourlyForecast(UpstreamModel):
    fx_time: Text = ""
    temp: Text = ""
    text: Text = ""
    wind_dir: Text = ""
    wind_scale: Text = ""
    humidity: Text = ""


class HourlyForecastResponse(UpstreamModel):
    hourly: Optional[List[HourlyForecast]] = None


class DailyForecast(UpstreamModel):
    fx_date: Text = ""
    temp_max: Text = ""
    temp_min: Text = ""
    text_day: Text = ""
    text_night: Text = ""
    wind_dir_day: Text = ""
    wind_scale_day: Text = ""
    wind_dir_night: Text = ""
    wind_scale_night: Text = ""


class DailyForecastResponse(UpstreamModel):
    daily: Optional[List[DailyForecast]] = None


class CityLocation(UpstreamModel):
    name: Text = ""
    id: Text = ""
    lat: Text = ""
    lon: Text = ""
    adm2: Text = ""
    adm1: Text = ""
    country: Text = ""
    tz: Text = ""
    utc_offset: Text = ""
    is_dst: Text = ""
    type: Text = ""
    rank: Text = ""
    fx_link: Text = ""


class CityLookupResponse(UpstreamModel):
    location: Optional[List[CityLocation]] = None


class WeatherWarning(UpstreamModel):
    id: Text = ""
    sender: Text = ""
    pub_time: Text = ""
    title: Text = ""
    start_time: Text = ""
    end_time: Text = ""
    status: Text = ""
    level: Text = ""
    type: Text = ""
    type_name: Text = ""
    urgency: Text = ""
    certainty: Text = ""
    text: Text = ""
    related: Text = ""


class WeatherWarningResponse(UpstreamModel):
    warning: Optional[List[WeatherWarning]] = None


class IndexForecast(UpstreamModel):
    date: Text = ""
    type: Text = ""
    name: Text = ""
    level: Text = ""
    category: Text = ""
    text: Text = ""


class IndicesForecastResponse(UpstreamModel):
    daily: Optional[List[IndexForecast]] = None
