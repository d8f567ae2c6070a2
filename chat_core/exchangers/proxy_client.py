"""后端代理 Exchanger。

本模块负责：

1. 接收统一的 ExchangeRequest。
2. 将其转换为 POST /api/proxy 的 JSON 请求体。
3. 调用 HTTP 接口并把网络错误、非 2xx 状态码包装为 ExchangeError。
4. 从响应的 output_data.content 中取出回复；字段缺失时返回占位文本，
   而不是报错。

每次调用只发一次请求：不重试，超时完全交给 httpx。
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from chat_core.domain.models import ExchangeRequest, ExchangeResponse, PLACEHOLDER_REPLY
from chat_core.domain.exceptions import ServerError, TransportError
from chat_core.infrastructure.logging.logger import log_event


class ProxyExchanger:
    """后端代理客户端实现。

    - name: Exchanger 名称（供日志/调试使用）。
    - send: 对外统一调用入口，返回 ExchangeResponse。
    """

    name = "proxy"

    def __init__(self, settings):
        # Settings 里包含 proxy_url、超时等配置
        self._settings = settings

    @property
    def url(self) -> str:
        return self._settings.proxy_url

    def send(self, req: ExchangeRequest) -> ExchangeResponse:
        """执行一次对话交换。

        步骤：
        1. 构造请求体。
        2. 发送请求并捕获网络错误/服务端错误。
        3. 解析 JSON，提取 output_data.content。
        """

        payload = req.to_payload()
        log_ctx: Dict[str, Any] = {"session_id": req.session_id, "url": self.url}
        start = time.monotonic()
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    self.url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            log_event(logging.ERROR, "Proxy request failed", log_ctx, error=str(e))
            raise TransportError(code="NETWORK_ERROR", message=str(e), url=self.url)
        latency_ms = int((time.monotonic() - start) * 1000)
        if not 200 <= resp.status_code < 300:
            log_event(logging.ERROR, "Proxy returned error status", log_ctx, status=resp.status_code, latency_ms=latency_ms)
            raise ServerError(
                code="SERVER_ERROR",
                message=f"Server error: {resp.status_code}",
                http_status=resp.status_code,
                url=self.url,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise ServerError(
                code="INVALID_RESPONSE",
                message=f"Invalid JSON response: {e}",
                http_status=resp.status_code,
                url=self.url,
            )
        result = self._parse_response(data)
        log_event(
            logging.INFO,
            "Proxy exchange completed",
            log_ctx,
            status=resp.status_code,
            latency_ms=latency_ms,
            degraded=result.degraded,
        )
        return result

    def _parse_response(self, data: Any) -> ExchangeResponse:
        """将后端原始 JSON 解析为 ExchangeResponse。"""

        content = self._extract_content(data)
        raw = data if isinstance(data, dict) else None
        if content is None:
            return ExchangeResponse(content=PLACEHOLDER_REPLY, degraded=True, raw=raw)
        return ExchangeResponse(content=content, raw=raw)

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        output = data.get("output_data")
        if not isinstance(output, dict):
            return None
        content = output.get("content")
        # 空字符串同样视为无有效回复
        if isinstance(content, str) and content:
            return content
        return None
