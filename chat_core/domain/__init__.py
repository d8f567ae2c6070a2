"""领域层模型与协议。

包含：
- models: Turn / ExchangeRequest / ExchangeResponse / ChatViewState 等数据结构。
- conversation: 只追加的会话序列 Conversation。
- storage: 键值存储协议 KeyValueStorage。
- exceptions: 业务异常类型定义。
"""
