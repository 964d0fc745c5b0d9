"""
YOURLS 客户端异常定义

- ConfigurationError: 构造客户端时配置错误（不会发起任何请求）
- APIFailure: 服务端返回了响应，但校验失败
- DecodingError: 响应校验通过，但缺少预期字段或字段无法转换
"""
from typing import Optional


class YourlsError(Exception):
    """YOURLS 客户端异常基类"""
    pass


class ConfigurationError(YourlsError, ValueError):
    """API 地址配置错误"""

    def __init__(self, url: str, reason: str = "API 地址必须以 http:// 或 https:// 开头"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class APIFailure(YourlsError, RuntimeError):
    """YOURLS API 调用失败"""

    def __init__(
        self,
        action: str,
        value: Optional[str] = None,
        api_message: str = "",
        status_code: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.action = action
        self.value = value
        self.api_message = api_message or ""
        self.status_code = status_code
        self.hint = hint

        message = f"YOURLS 请求失败 [{action}]"
        if value is not None:
            message += f" ({value})"
        message += f": {self.api_message}"
        if hint:
            message += f" - {hint}"
        super().__init__(message)


class DecodingError(YourlsError, RuntimeError):
    """响应字段缺失或格式不正确"""

    def __init__(self, field: str, reason: str, action: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.action = action
        prefix = f"[{action}] " if action else ""
        super().__init__(f"{prefix}无法解析响应字段 '{field}': {reason}")
