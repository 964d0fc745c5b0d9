#!/usr/bin/env python3
"""
YOURLS 客户端使用示例

运行方式:
    python example.py

需要在环境变量或 .env 文件中配置:
    YOURLS_API_URL=https://sho.rt/yourls-api.php
    YOURLS_USERNAME=your_username
    YOURLS_PASSWORD=your_password
    YOURLS_TIMEOUT=10   (可选)
"""
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from yourls_client import YourlsClient
from yourls_exceptions import YourlsError


def client_from_env() -> YourlsClient:
    """根据环境变量创建客户端"""
    load_dotenv()
    return YourlsClient(
        os.getenv("YOURLS_API_URL", "http://sho.rt/yourls-api.php"),
        os.getenv("YOURLS_USERNAME", ""),
        os.getenv("YOURLS_PASSWORD", ""),
        timeout=float(os.getenv("YOURLS_TIMEOUT", "10")),
    )


def main(client: Optional[YourlsClient] = None) -> int:
    """依次演示各个 API，返回失败的调用次数"""
    if client is None:
        client = client_from_env()

    failures = 0
    long_url = "http://example.com"
    short_url = ""

    # 示例1: 创建短链
    try:
        short_url = client.generate_short_url(long_url, "custom-keyword", "Example Title")
        print(f"短链接: {short_url}")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例2: 还原长链接
    try:
        print(f"原始链接: {client.expand_short_url(short_url)}")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例3: 单条短链统计
    try:
        stats = client.get_short_url_stats("custom-keyword")
        print(f"点击次数: {stats.clicks} (创建于 {stats.timestamp:%Y-%m-%d %H:%M:%S})")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例4: 全站统计
    try:
        db_stats = client.get_global_stats()
        print(f"总链接数: {db_stats.total_links}, 总点击数: {db_stats.total_clicks}")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例5: 点击量最高的链接
    try:
        print(f"Top 链接: {client.get_stats('top', 1)}")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例6: 按长链接查找短链
    try:
        for found in client.find_short_urls_by_long_url(long_url).short_urls:
            print(f"找到短链: {found}")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例7: 修改短链指向
    try:
        client.update_short_url_target(short_url, "http://google.com")
        print("✅ 已更新")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    # 示例8: 删除短链
    try:
        client.delete_by_short_url(short_url)
        print("✅ 已删除")
    except YourlsError as e:
        failures += 1
        print(f"❌ {e}")

    return failures


if __name__ == "__main__":
    sys.exit(1 if main() else 0)
