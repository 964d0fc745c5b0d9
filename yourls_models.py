from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from yourls_exceptions import DecodingError
from yourls_utils import qualify_keyword


class YourlsResponse(BaseModel):
    """
    YOURLS API 原始响应（状态码 + JSON 内容）

    字段不可重新赋值，构造时 body 会复制一份，与调用方传入的字典互不影响。
    不可变只到第一层：请通过 get() 读取，不要修改 body 里的内容。
    """
    model_config = ConfigDict(frozen=True)

    status_code: int
    body: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("body", mode="before")
    @classmethod
    def _copy_body(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return dict(value)
        return value

    @classmethod
    def transport_failure(cls, message: str) -> "YourlsResponse":
        """请求未能完成时使用的替代响应"""
        return cls(status_code=500, body={"message": message})

    @classmethod
    def from_http(cls, response: requests.Response) -> "YourlsResponse":
        """从 requests 响应构建，JSON 无法解析时视为请求失败"""
        try:
            body = response.json()
        except ValueError as e:
            return cls.transport_failure(f"无法解析响应 JSON: {e}")
        if not isinstance(body, dict):
            return cls.transport_failure(f"响应不是 JSON 对象: {type(body).__name__}")
        return cls(status_code=response.status_code, body=body)

    def get(self, key: str, default: Any = None) -> Any:
        """读取单个字段，不存在时返回 default"""
        return self.body.get(key, default)

    def is_valid(self) -> bool:
        """是否成功响应 (2xx)"""
        return 200 <= self.status_code < 300

    @property
    def message(self) -> str:
        message = self.body.get("message")
        return "" if message is None else str(message)

    @property
    def status(self) -> Optional[str]:
        return self.body.get("status")


def _section(response: YourlsResponse, key: str, action: str) -> Dict[str, Any]:
    """取出响应中的对象字段"""
    value = response.get(key)
    if value is None:
        raise DecodingError(key, "字段不存在", action=action)
    if not isinstance(value, dict):
        raise DecodingError(key, f"应为对象，实际为 {type(value).__name__}", action=action)
    return value


def _validation_reason(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
    )


class YourlsUrlStats(BaseModel):
    """单条短链统计信息"""
    model_config = ConfigDict(frozen=True)

    clicks: int = Field(ge=0)
    timestamp: datetime
    ip: str
    long_url: str
    short_url: str
    title: Optional[str] = None

    @field_validator("ip", "long_url", "short_url", "title", mode="before")
    @classmethod
    def _numbers_to_str(cls, value: Any) -> Any:
        # 纯数字短码会以数字形式返回
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        # YOURLS 返回 "YYYY-MM-DD HH:MM:SS"
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip())
        return value

    @classmethod
    def from_response(cls, response: YourlsResponse) -> "YourlsUrlStats":
        link = _section(response, "link", "url-stats")
        try:
            return cls(
                clicks=link["clicks"],
                timestamp=link["timestamp"],
                ip=link["ip"],
                long_url=link["url"],
                short_url=link["shorturl"],
                title=link.get("title"),
            )
        except KeyError as e:
            raise DecodingError(f"link.{e.args[0]}", "字段不存在", action="url-stats") from e
        except ValidationError as e:
            raise DecodingError("link", _validation_reason(e), action="url-stats") from e


class YourlsGlobalStats(BaseModel):
    """全站统计信息"""
    model_config = ConfigDict(frozen=True)

    total_links: int = Field(ge=0)
    total_clicks: int = Field(ge=0)

    @classmethod
    def from_response(cls, response: YourlsResponse) -> "YourlsGlobalStats":
        db_stats = _section(response, "db-stats", "db-stats")
        try:
            return cls(
                total_links=db_stats["total_links"],
                total_clicks=db_stats["total_clicks"],
            )
        except KeyError as e:
            raise DecodingError(f"db-stats.{e.args[0]}", "字段不存在", action="db-stats") from e
        except ValidationError as e:
            raise DecodingError("db-stats", _validation_reason(e), action="db-stats") from e


class FindShortUrlsResult(BaseModel):
    """按长链接子串查找到的短链列表"""
    model_config = ConfigDict(frozen=True)

    short_urls: List[str]

    @classmethod
    def from_response(cls, response: YourlsResponse, domain: str) -> "FindShortUrlsResult":
        keywords = response.get("keywords")
        if keywords is None:
            raise DecodingError("keywords", "字段不存在", action="lookup-url-substr")
        if not isinstance(keywords, list):
            raise DecodingError(
                "keywords",
                f"应为数组，实际为 {type(keywords).__name__}",
                action="lookup-url-substr",
            )
        return cls(short_urls=[qualify_keyword(domain, str(keyword)) for keyword in keywords])
