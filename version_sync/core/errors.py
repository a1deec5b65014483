"""
错误类型模块 - 版本检查的异常体系

所有检查失败都以 VersionSyncError 子类的形式抛出，
异常的字符串形式即为面向用户的诊断信息。
"""

from typing import Optional


class VersionSyncError(Exception):
    """所有版本检查错误的基类"""


class ConfigurationError(VersionSyncError):
    """模板或正则表达式无法解析"""


class FileReadError(VersionSyncError):
    """文件无法读取"""


class VersionParseError(VersionSyncError):
    """包版本号不是合法的 SemVer"""


class RequirementParseError(VersionSyncError):
    """版本范围表达式无法解析"""


class PackageInfoError(VersionSyncError):
    """无法从 pyproject.toml 获取包名或版本号"""


class NotFoundError(VersionSyncError):
    """要求至少一个匹配，但没有找到"""


class VersionMismatch(VersionSyncError):
    """
    版本不兼容

    Attributes:
        component: 不一致的部分 (major, minor, patch, pre-release)
        expected: 包的实际版本中对应的值
        found: 版本范围中提取到的值
    """

    def __init__(self, component: str, expected: object, found: object):
        self.component = component
        self.expected = expected
        self.found = found
        if component == "pre-release":
            message = f'expected pre-release "{expected}", found "{found}"'
        else:
            message = f"expected {component} version {expected}, found {found}"
        super().__init__(message)


class CheckFailed(VersionSyncError):
    """
    汇总失败 - 扫描多个位置后至少一处不通过

    Attributes:
        failures: 每个失败位置的描述
    """

    def __init__(self, message: str, failures: Optional[list[str]] = None):
        super().__init__(message)
        self.failures = failures or []


class SourceParseError(VersionSyncError):
    """源文件语法错误"""


class InvalidUrlError(VersionSyncError):
    """文档 URL 不合法或指向错误的包"""
