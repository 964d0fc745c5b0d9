from urllib.parse import urlparse

from yourls_exceptions import ConfigurationError


def validate_api_url(url: str) -> bool:
    """验证API地址格式"""
    return isinstance(url, str) and url.lower().startswith(('http://', 'https://'))


def normalize_api_url(url: str) -> str:
    """校验并规范化API地址（去掉结尾的斜杠）"""
    if not validate_api_url(url):
        raise ConfigurationError(url)
    return url.rstrip('/')


def get_domain(api_url: str) -> str:
    """
    从API地址提取短链域名

    例如 http://sho.rt/yourls-api.php -> http://sho.rt
    无法解析协议或主机时返回空字符串
    """
    try:
        parsed = urlparse(api_url)
        parsed.port  # 端口非法时抛出 ValueError
    except ValueError:
        return ''

    if not parsed.scheme or not parsed.hostname:
        return ''

    # netloc 保留 IPv6 的方括号，去掉 user:pass@
    return f"{parsed.scheme}://{parsed.netloc.rpartition('@')[2]}"


def qualify_keyword(domain: str, keyword: str) -> str:
    """把短码拼接成完整短链"""
    return f"{domain}/{keyword}"
