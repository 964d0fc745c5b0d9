"""
YOURLS 客户端 SDK
方便其他 Python 程序调用 YOURLS 短链服务 API
"""
import logging
import requests
from typing import Any, Callable, Dict, Optional

from yourls_exceptions import APIFailure, DecodingError
from yourls_models import FindShortUrlsResult, YourlsGlobalStats, YourlsResponse, YourlsUrlStats
from yourls_utils import get_domain, normalize_api_url, qualify_keyword

logger = logging.getLogger("yourls_client")

DELETE_PLUGIN_HINT = "请确认服务端已安装 API delete 插件"
UPDATE_PLUGIN_HINT = "请确认服务端已安装 API edit url (update) 插件"
LOOKUP_PLUGIN_HINT = "请确认服务端支持 lookup-url-substr 查询"


def _is_2xx(value: Any) -> bool:
    try:
        return 200 <= int(value) < 300
    except (TypeError, ValueError):
        return False


def status_code_ok(response: YourlsResponse) -> bool:
    """默认校验：HTTP 2xx，且响应中带 statusCode 时它也必须是 2xx"""
    if not response.is_valid():
        return False
    status_code = response.get("statusCode")
    return status_code is None or _is_2xx(status_code)


def status_success(response: YourlsResponse) -> bool:
    """shorturl 校验：HTTP 2xx 且 status 为 success"""
    return response.is_valid() and response.status == "success"


class YourlsClient:
    """YOURLS 客户端"""

    def __init__(self, api_url: str, username: str, password: str, timeout: float = 10):
        """
        初始化客户端

        Args:
            api_url: YOURLS API 地址，例如: https://sho.rt/yourls-api.php
            username: YOURLS 用户名
            password: YOURLS 密码
            timeout: 单次请求超时时间（秒）

        Raises:
            ConfigurationError: api_url 不是 http(s) 地址
        """
        self.api_url = normalize_api_url(api_url)
        self.domain = get_domain(self.api_url)
        self.username = username
        self.password = password
        self.timeout = timeout

    def _send(self, action: str, params: Optional[Dict[str, Any]] = None) -> YourlsResponse:
        """发送一次 POST 请求，请求失败时返回状态码 500 的替代响应"""
        data = {
            "action": action,
            "format": "json",
            "username": self.username,
            "password": self.password,
        }
        if params:
            data.update(params)

        logger.debug(f"YOURLS 请求: action={action} url={self.api_url}")
        try:
            response = requests.post(self.api_url, data=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"YOURLS 请求未完成: action={action} error={e}")
            return YourlsResponse.transport_failure(str(e))
        return YourlsResponse.from_http(response)

    def _call(
        self,
        action: str,
        params: Optional[Dict[str, Any]] = None,
        value: Optional[str] = None,
        is_valid: Callable[[YourlsResponse], bool] = status_code_ok,
        hint: Optional[str] = None,
    ) -> YourlsResponse:
        """发送请求并按该 action 的规则校验，失败时抛出 APIFailure"""
        response = self._send(action, params)
        if not is_valid(response):
            raise self._failure(action, value, response, hint)
        return response

    @staticmethod
    def _failure(
        action: str,
        value: Optional[str],
        response: YourlsResponse,
        hint: Optional[str] = None,
    ) -> APIFailure:
        logger.warning(
            f"YOURLS 请求失败: action={action} status={response.status_code} message={response.message}"
        )
        return APIFailure(
            action,
            value=value,
            api_message=response.message,
            status_code=response.status_code,
            hint=hint,
        )

    @staticmethod
    def _field(response: YourlsResponse, action: str, key: str) -> Any:
        value = response.get(key)
        if value is None:
            raise DecodingError(key, "字段不存在", action=action)
        return value

    def generate_short_url(
        self,
        long_url: str,
        keyword: Optional[str] = None,
        title: Optional[str] = None,
    ) -> str:
        """
        将长链接转换为短链接

        如果服务端提示短码/长链接已存在，并返回了 url.keyword，
        直接返回已有的短链，而不是抛出异常

        Args:
            long_url: 要缩短的长链接
            keyword: 可选的自定义短码
            title: 可选的标题

        Returns:
            完整的短链接

        Example:
            >>> client = YourlsClient("https://sho.rt/yourls-api.php", "user", "secret")
            >>> client.generate_short_url("https://www.example.com/very/long/url")
            'https://sho.rt/1f'
        """
        action = "shorturl"
        params = {"url": long_url}
        if keyword:
            params["keyword"] = keyword
        if title:
            params["title"] = title

        response = self._send(action, params)
        if status_success(response):
            return str(self._field(response, action, "shorturl"))

        existing = response.get("url")
        if isinstance(existing, dict) and existing.get("keyword"):
            short_url = qualify_keyword(self.domain, existing["keyword"])
            logger.info(f"短链已存在，返回已有短链: {short_url}")
            return short_url

        raise self._failure(action, long_url, response)

    def expand_short_url(self, short_url: str) -> str:
        """获取短链对应的长链接"""
        response = self._call("expand", {"shorturl": short_url}, value=short_url)
        return str(self._field(response, "expand", "longurl"))

    def get_short_url_stats(self, short_url: str) -> YourlsUrlStats:
        """获取短链统计信息"""
        response = self._call("url-stats", {"shorturl": short_url}, value=short_url)
        return YourlsUrlStats.from_response(response)

    def get_stats(self, filter: str = "top", limit: int = 10) -> Dict[str, Any]:
        """
        获取链接统计列表

        Args:
            filter: top / bottom / rand / last（原样传给服务端，不做校验）
            limit: 返回的最大记录数
        """
        response = self._call(
            "stats",
            {"filter": filter, "limit": limit},
            value=f"filter={filter}, limit={limit}",
        )
        return dict(response.body)

    def get_global_stats(self) -> YourlsGlobalStats:
        """获取全站统计信息"""
        response = self._call("db-stats")
        return YourlsGlobalStats.from_response(response)

    def delete_by_short_url(self, short_url: str) -> None:
        """删除短链（需要服务端 delete 插件）"""
        self._call("delete", {"shorturl": short_url}, value=short_url, hint=DELETE_PLUGIN_HINT)

    def find_short_urls_by_long_url(self, long_url: str) -> FindShortUrlsResult:
        """按长链接子串查找短链（需要服务端支持 lookup-url-substr）"""
        response = self._call(
            "lookup-url-substr",
            {"substr": long_url},
            value=long_url,
            hint=LOOKUP_PLUGIN_HINT,
        )
        return FindShortUrlsResult.from_response(response, self.domain)

    def update_short_url_target(self, short_url: str, target_url: str) -> None:
        """修改短链指向的长链接（需要服务端 update 插件）"""
        self._call(
            "update",
            {"shorturl": short_url, "url": target_url},
            value=f"{short_url} -> {target_url}",
            hint=UPDATE_PLUGIN_HINT,
        )
