"""modinstaller - 自定义依赖安装器"""

__version__ = "0.1.0"
