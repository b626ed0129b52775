"""
Weather service: the four QWeather lookup tools.

Every call validates its arguments, mints one credential, makes at most one
GET and renders the reply as a single text block. When the upstream call
fails or returns no records the tool answers with a "not found" message
instead of raising.
"""
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from mcp.types import TextContent
from pydantic import BaseModel, ValidationError

from ..config import QWeatherConfig
from ..errors import UnknownToolError
from ..models.arguments import (
    HOURLY_FORECASTS,
    CityLookupArguments,
    IndicesForecastArguments,
    WeatherArguments,
    WeatherWarningArguments,
    validate_arguments,
)
from ..models.base import RichToolDescription, ToolDefinition, ToolService
from ..models.responses import (
    CityLocation,
    CityLookupResponse,
    DailyForecast,
    DailyForecastResponse,
    HourlyForecast,
    HourlyForecastResponse,
    IndexForecast,
    IndicesForecastResponse,
    WeatherNow,
    WeatherNowResponse,
    WeatherWarning,
    WeatherWarningResponse,
)
from .qweather_client import FetchResult, QWeatherClient
import logging

logger = logging.getLogger(__name__)

GET_WEATHER = "get-weather"
CITY_LOOKUP = "city-lookup"
WEATHER_WARNING = "weather-warning"
INDICES_FORECAST = "indices-forecast"

TOOL_NAMES = (GET_WEATHER, CITY_LOOKUP, WEATHER_WARNING, INDICES_FORECAST)

RECORD_SEPARATOR = "------------------------"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def text_result(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


def parse_body(model: Type[ResponseT], result: FetchResult) -> Optional[ResponseT]:
    """Read a successful fetch into ``model``; ``None`` if it failed or is malformed."""
    if not result.ok:
        return None
    try:
        return model.model_validate(result.data)
    except ValidationError as e:
        logger.warning(f"Unexpected {model.__name__} body: {e.error_count()} validation error(s)")
        return None


def join_records(blocks: List[str]) -> str:
    """Terminate each record with the separator line and stack them."""
    return "\n".join(f"{block}\n{RECORD_SEPARATOR}" for block in blocks)


def format_current(location: str, now: WeatherNow) -> str:
    return "\n".join([
        f"地点: {location}",
        f"观测时间: {now.obs_time}",
        f"天气: {now.text}",
        f"温度: {now.temp}°C",
        f"体感温度: {now.feels_like}°C",
        f"风向: {now.wind_dir}",
        f"风力: {now.wind_scale}级",
    ])


def format_hour(hour: HourlyForecast) -> str:
    return "\n".join([
        f"时间: {hour.fx_time}",
        f"天气: {hour.text}",
        f"温度: {hour.temp}°C",
        f"湿度: {hour.humidity}%",
        f"风向: {hour.wind_dir} {hour.wind_scale}级",
    ])


def format_day(day: DailyForecast) -> str:
    return "\n".join([
        f"日期: {day.fx_date}",
        f"白天天气: {day.text_day}",
        f"夜间天气: {day.text_night}",
        f"最高温度: {day.temp_max}°C",
        f"最低温度: {day.temp_min}°C",
        f"白天风向: {day.wind_dir_day} {day.wind_scale_day}级",
        f"夜间风向: {day.wind_dir_night} {day.wind_scale_night}级",
    ])


def format_city(city: CityLocation) -> str:
    return "\n".join([
        f"城市: {city.name}",
        f"ID: {city.id}",
        f"经纬度: {city.lat}, {city.lon}",
        f"省份: {city.adm1}",
        f"城市: {city.adm2}",
        f"国家: {city.country}",
        f"时区: {city.tz}",
        f"类型: {city.type}",
    ])


def format_warning(warning: WeatherWarning) -> str:
    return "\n".join([
        f"预警标题: {warning.title}",
        f"预警类型: {warning.type_name} ({warning.type})",
        f"预警等级: {warning.level}",
        f"预警状态: {warning.status}",
        f"发布时间: {warning.pub_time}",
        f"生效时间: {warning.start_time} 至 {warning.end_time}",
        f"紧急程度: {warning.urgency}",
        f"确定性: {warning.certainty}",
        f"发布单位: {warning.sender}",
        f"预警内容: {warning.text}",
    ])


def format_index(index: IndexForecast) -> str:
    return "\n".join([
        f"日期: {index.date}",
        f"类型: {index.name}（ID: {index.type}）",
        f"等级: {index.level}（{index.category}）",
        f"建议: {index.text}",
    ])


class WeatherService(ToolService):
    """Weather lookups backed by the QWeather API."""

    def __init__(self, config: QWeatherConfig, client: Optional[QWeatherClient] = None):
        super().__init__("weather")
        self.config = config
        self.client = client or QWeatherClient(config)
        self._tools: Dict[str, Tuple[Type[BaseModel], Callable[[Any], Awaitable[List[TextContent]]]]] = {
            GET_WEATHER: (WeatherArguments, self.get_weather),
            CITY_LOOKUP: (CityLookupArguments, self.city_lookup),
            WEATHER_WARNING: (WeatherWarningArguments, self.weather_warning),
            INDICES_FORECAST: (IndicesForecastArguments, self.indices_forecast),
        }

    def get_tool_descriptions(self) -> Dict[str, RichToolDescription]:
        """Get tool descriptions for weather service."""
        side_effects = "调用和风天气 API，每次请求签发一个新的 JWT 凭证。"
        return {
            GET_WEATHER: RichToolDescription(
                description="获取中国国内的天气预报",
                use_when="需要某个经纬度位置的实时天气、逐小时预报（24h/72h/168h）或逐日预报（3d-30d）时。",
                side_effects=side_effects,
            ),
            CITY_LOOKUP: RichToolDescription(
                description="根据城市名称搜索城市信息，返回经纬度坐标",
                use_when="只知道城市名称，需要先查出 LocationID 或经纬度再查询天气时。",
                side_effects=side_effects,
            ),
            WEATHER_WARNING: RichToolDescription(
                description="获取天气灾害预警信息",
                use_when="需要了解某地当前生效的暴雨、台风、高温等灾害预警时。",
                side_effects=side_effects,
            ),
            INDICES_FORECAST: RichToolDescription(
                description="获取天气生活指数预报（如穿衣、洗车、运动等）",
                use_when="需要穿衣、洗车、运动、紫外线等生活指数建议时。",
                side_effects=side_effects,
            ),
        }

    def list_tools(self) -> List[ToolDefinition]:
        """Tool definitions with their JSON input schemas."""
        descriptions = self.get_tool_descriptions()
        return [
            ToolDefinition(
                name=name,
                description=descriptions[name].description,
                input_schema=model.model_json_schema(),
            )
            for name, (model, _handler) in self._tools.items()
        ]

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> List[TextContent]:
        """Validate ``arguments`` for tool ``name`` and run it.

        Raises:
            UnknownToolError: if ``name`` is not one of :data:`TOOL_NAMES`
            ToolValidationError: if the arguments do not match the tool's schema
            SigningError: if no credential could be minted
        """
        if name not in self._tools:
            raise UnknownToolError(name)
        model, handler = self._tools[name]
        args = validate_arguments(name, model, arguments)
        self.logger.info(f"{name} tool called with {args.model_dump(exclude_none=True)}")
        return await handler(args)

    async def get_weather(self, args: WeatherArguments) -> List[TextContent]:
        """Current conditions, hourly or daily forecast depending on ``days``."""
        if args.days == "now":
            return await self._current_weather(args.location)
        if args.days in HOURLY_FORECASTS:
            return await self._hourly_forecast(args.location, args.days)
        return await self._daily_forecast(args.location, args.days)

    async def _current_weather(self, location: str) -> List[TextContent]:
        result = await self.client.fetch("/v7/weather/now", {"location": location})
        body = parse_body(WeatherNowResponse, result)
        if body is None or body.now is None:
            return text_result(f"无法获取 {location} 的天气数据")
        return text_result(format_current(location, body.now))

    async def _hourly_forecast(self, location: str, days: str) -> List[TextContent]:
        result = await self.client.fetch(f"/v7/weather/{days}", {"location": location})
        body = parse_body(HourlyForecastResponse, result)
        if body is None or not body.hourly:
            return text_result(f"无法获取 {location} 的逐小时天气预报数据")
        hours = int(days.rstrip("h"))
        records = join_records([format_hour(hour) for hour in body.hourly])
        return text_result(f"地点: {location}\n{hours}小时预报:\n{records}")

    async def _daily_forecast(self, location: str, days: str) -> List[TextContent]:
        result = await self.client.fetch(f"/v7/weather/{days}", {"location": location})
        body = parse_body(DailyForecastResponse, result)
        if body is None or not body.daily:
            return text_result(f"无法获取 {location} 的天气预报数据")
        day_count = int(days.rstrip("d"))
        records = join_records([format_day(day) for day in body.daily])
        return text_result(f"地点: {location}\n{day_count}天预报:\n{records}")

    async def city_lookup(self, args: CityLookupArguments) -> List[TextContent]:
        """Search cities by name; returns up to ``number`` matches."""
        params = {
            "location": args.location,
            "adm": args.adm or None,
            "range": args.range or None,
            "number": args.number,
        }
        result = await self.client.fetch("/geo/v2/city/lookup", params)
        body = parse_body(CityLookupResponse, result)
        if body is None or not body.location:
            return text_result(f'未找到城市 "{args.location}" 的相关信息')
        records = join_records([format_city(city) for city in body.location])
        return text_result(f'搜索 "{args.location}" 的结果:\n{records}')

    async def weather_warning(self, args: WeatherWarningArguments) -> List[TextContent]:
        """Active severe-weather warnings for a location."""
        result = await self.client.fetch(
            "/v7/warning/now", {"location": args.location, "lang": args.lang}
        )
        body = parse_body(WeatherWarningResponse, result)
        if body is None or not body.warning:
            return text_result(f"当前 {args.location} 地区暂无天气预警信息")
        records = join_records([format_warning(warning) for warning in body.warning])
        return text_result(f"{args.location} 地区天气预警信息:\n{records}")

    async def indices_forecast(self, args: IndicesForecastArguments) -> List[TextContent]:
        """Life-style index forecast; ``type`` is a comma-separated list of index IDs."""
        result = await self.client.fetch(
            f"/v7/indices/{args.days}",
            {"location": args.location, "type": args.type, "lang": args.lang},
        )
        body = parse_body(IndicesForecastResponse, result)
        if body is None or not body.daily:
            return text_result(f"未查询到 {args.location} 的天气指数信息")
        records = join_records([format_index(index) for index in body.daily])
        return text_result(f"{args.location} 的天气生活指数:\n{records}")

    def register_tools(self, mcp):
        """Register weather tools with the MCP server."""
        from ..tools.weather_tools import register_weather_tools

        self.logger.info("Registering weather tools...")
        register_weather_tools(mcp, self)
        self.logger.info("Weather tools registered successfully")
