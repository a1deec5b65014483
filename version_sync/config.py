"""
配置模块 - 从 pyproject.toml 获取包名和版本号

支持的格式：
- [project] name / version
- [tool.poetry] name / version
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from version_sync.core.errors import PackageInfoError
from version_sync.core.files import PathLike

# Handle tomllib/tomli for different Python versions
try:
    import tomllib
except ImportError:
    import tomli as tomllib

DEFAULT_PYPROJECT = "pyproject.toml"


@dataclass(frozen=True)
class PackageInfo:
    """
    包信息

    Attributes:
        name: 包名
        version: 版本号
    """
    name: str
    version: str


def _metadata_tables(content: dict[str, Any]) -> list[dict[str, Any]]:
    tables = []
    project = content.get("project")
    if isinstance(project, dict):
        tables.append(project)
    poetry = content.get("tool", {}).get("poetry") if isinstance(content.get("tool"), dict) else None
    if isinstance(poetry, dict):
        tables.append(poetry)
    return tables


def load_package_info(pyproject: PathLike = DEFAULT_PYPROJECT) -> PackageInfo:
    """
    读取 pyproject.toml 中的包名和版本号

    [project] 优先；版本号声明为 dynamic 时回退到 [tool.poetry]。

    Raises:
        PackageInfoError: 文件不存在、不是合法 TOML 或缺少 name/version
    """
    path = Path(pyproject)
    try:
        content = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as err:
        raise PackageInfoError(f"could not read {path}: {err.strerror or err}") from err
    except tomllib.TOMLDecodeError as err:
        raise PackageInfoError(f"could not parse {path}: {err}") from err

    name: Optional[str] = None
    version: Optional[str] = None
    for table in _metadata_tables(content):
        if name is None and isinstance(table.get("name"), str):
            name = table["name"]
        if version is None and isinstance(table.get("version"), str):
            version = table["version"]

    if name is None:
        raise PackageInfoError(f"no package name in {path}")
    if version is None:
        project = content.get("project")
        dynamic = project.get("dynamic", []) if isinstance(project, dict) else []
        if isinstance(dynamic, list) and "version" in dynamic:
            raise PackageInfoError(f"dynamic version in {path}, pass the version explicitly")
        raise PackageInfoError(f"no package version in {path}")
    return PackageInfo(name=name, version=version)


def resolve_package_info(
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
) -> PackageInfo:
    """
    确定要检查的包名和版本号

    两者都显式给出时不读取 pyproject.toml，否则缺少的部分从文件中补全。
    """
    if pkg_name is not None and pkg_version is not None:
        return PackageInfo(name=pkg_name, version=pkg_version)
    info = load_package_info(pyproject)
    return PackageInfo(
        name=pkg_name if pkg_name is not None else info.name,
        version=pkg_version if pkg_version is not None else info.version,
    )
