"""
内存 Todo 服务：单进程 HTTP 接口 + 全局功能开关
"""

__version__ = "0.1.0"
