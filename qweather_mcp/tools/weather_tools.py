"""
MCP tool functions for the QWeather lookups.

The functions only describe the tool signatures to FastMCP; each forwards
its arguments to :meth:`WeatherService.dispatch`. Every parameter is optional
in the advertised schema so that the protocol layer, which stops at the first
schema error, never pre-empts ``dispatch``; required fields, enums and ranges
are enforced there and all violations are reported together.
"""
from typing import Annotated, Any, Dict, List, Optional
from pydantic import Field
from mcp.types import TextContent
import logging

from ..errors import QWeatherError, to_mcp_error

logger = logging.getLogger(__name__)


def register_weather_tools(mcp, service):
    """Register the four weather tools with the MCP server."""

    logger.info("Registering weather tools...")

    descriptions = service.get_tool_descriptions()

    async def call(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        arguments = {key: value for key, value in arguments.items() if value is not None}
        try:
            return await service.dispatch(name, arguments)
        except QWeatherError as e:
            logger.error(f"{name} tool error: {e}")
            raise to_mcp_error(e) from e

    @mcp.tool(name="get-weather", description=descriptions["get-weather"].model_dump_json())
    async def get_weather(
        location: Annotated[Optional[str], Field(description="必填。逗号分隔的经纬度信息 (e.g., 116.40,39.90)")] = None,
        days: Annotated[
            Optional[str],
            Field(description="预报天数，可选 now、24h、72h、168h、3d、7d、10d、15d、30d，默认now。now为实时天气，24h为24小时预报，3d为3天预报，以此类推"),
        ] = None,
    ) -> List[TextContent]:
        """Get current weather or a forecast for a location."""
        return await call("get-weather", {"location": location, "days": days})

    @mcp.tool(name="city-lookup", description=descriptions["city-lookup"].model_dump_json())
    async def city_lookup(
        location: Annotated[Optional[str], Field(description="必填。城市名称，支持模糊搜索")] = None,
        adm: Annotated[Optional[str], Field(description="上级行政区划，可选参数")] = None,
        range: Annotated[Optional[str], Field(description="搜索范围，可选参数")] = None,
        number: Annotated[Optional[int], Field(description="返回结果数量，1-20，默认10")] = None,
    ) -> List[TextContent]:
        """Search cities by name."""
        return await call(
            "city-lookup",
            {"location": location, "adm": adm, "range": range, "number": number},
        )

    @mcp.tool(name="weather-warning", description=descriptions["weather-warning"].model_dump_json())
    async def weather_warning(
        location: Annotated[Optional[str], Field(description="必填。LocationID或经纬度坐标 (e.g., 101010100 或 116.41,39.92)")] = None,
        lang: Annotated[Optional[str], Field(description="多语言设置，默认zh")] = None,
    ) -> List[TextContent]:
        """Get active weather warnings for a location."""
        return await call("weather-warning", {"location": location, "lang": lang})

    @mcp.tool(name="indices-forecast", description=descriptions["indices-forecast"].model_dump_json())
    async def indices_forecast(
        location: Annotated[Optional[str], Field(description="必填。LocationID或经纬度坐标 (e.g., 101010100 或 116.41,39.92)")] = None,
        type: Annotated[Optional[str], Field(description="必填。指数类型ID，多个用英文逗号分隔（如1,2,3）")] = None,
        days: Annotated[Optional[str], Field(description="预报天数，1d或3d，默认1d")] = None,
        lang: Annotated[Optional[str], Field(description="多语言设置，默认zh")] = None,
    ) -> List[TextContent]:
        """Get the life index forecast for a location."""
        return await call(
            "indices-forecast",
            {"location": location, "type": type, "days": days, "lang": lang},
        )

    logger.info("Weather tools registered successfully")
