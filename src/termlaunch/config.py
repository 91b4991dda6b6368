"""termlaunch 配置

配置分为以下几类：
- tmux 配置：可执行文件、调用超时
- Hook 配置：pre 命令超时
- 项目配置：项目文件目录、扩展名
- 布局配置：降级时使用的默认布局
- 日志配置
"""

import os

# === tmux 配置 ===
TMUX_BIN = os.environ.get("TERMLAUNCH_TMUX_BIN", "tmux")  # tmux 可执行文件
COMMAND_TIMEOUT_SECONDS = float(os.environ.get("TERMLAUNCH_COMMAND_TIMEOUT", "10"))  # 单条命令超时（秒）

# Use tab as delimiter to avoid conflicts with colons in data (paths, names)
FIELD_SEP = "\t"

# === Hook 配置 ===
HOOK_TIMEOUT_SECONDS = float(os.environ.get("TERMLAUNCH_HOOK_TIMEOUT", "300"))  # pre 命令超时（秒）

# === 项目配置 ===
PROJECT_DIR = os.environ.get(
    "TERMLAUNCH_PROJECT_DIR", os.path.join(os.path.expanduser("~"), ".termlaunch")
)  # 项目文件目录
PROJECT_EXTENSIONS = (".yml", ".yaml")  # 按顺序查找

# === 布局配置 ===
DEFAULT_LAYOUT = os.environ.get("TERMLAUNCH_DEFAULT_LAYOUT", "tiled")  # 不支持的布局降级为此布局
DEFAULT_WINDOW_LABEL = "window-{index}"  # 未命名窗口的默认名称

# === 日志配置 ===
LOG_LEVEL = os.environ.get("TERMLAUNCH_LOG_LEVEL", "WARNING")  # 日志级别
LOG_MAX_CMD_LEN = 120  # 命令日志截断长度
