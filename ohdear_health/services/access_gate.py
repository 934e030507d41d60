"""共享密钥校验"""

import hmac
from typing import Sequence

SECRET_HEADER = 'Oh-Dear-Health-Check-Secret'


class AccessGate:
    """校验请求头中的共享密钥，请求头必须恰好出现一次且值完全一致"""

    def __init__(self, header_name: str = SECRET_HEADER):
        self.header_name = header_name

    def is_allowed(self, header_values: Sequence[str], secret: str) -> bool:
        """
        Args:
            header_values: 请求中该请求头的全部取值
            secret: 配置的共享密钥

        Returns:
            bool: 是否放行
        """
        if len(header_values) != 1:
            return False

        provided = header_values[0].encode('utf-8', 'surrogateescape')
        return hmac.compare_digest(provided, secret.encode('utf-8'))
