#!/usr/bin/env python3
"""
作业记录命令行工具

用法:
    job_cli.py put job.json      # 从文件（或 - 表示标准输入）保存作业
    job_cli.py get job-1         # 打印作业的 JSON 记录
    job_cli.py delete job-1      # 删除作业
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# 将项目根目录添加到sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from core.config import get_settings
from core.exceptions import ECRException
from core.models import Job
from core.services import JobStore
from core.status import StatusInfo
from core.utils.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ECR 作业记录工具")
    parser.add_argument("--log-level", default="WARNING", help="日志级别")
    sub = parser.add_subparsers(dest="command", required=True)

    put = sub.add_parser("put", help="保存作业")
    put.add_argument("file", help="作业 JSON 文件，- 表示标准输入")

    get = sub.add_parser("get", help="读取作业")
    get.add_argument("job_id")

    delete = sub.add_parser("delete", help="删除作业")
    delete.add_argument("job_id")

    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run(store: JobStore, args: argparse.Namespace) -> StatusInfo:
    """执行子命令，get 成功时把记录打印到标准输出"""
    if args.command == "put":
        job = Job.parse(_read_source(args.file))
        return store.store(job)
    if args.command == "get":
        job = store.retrieve(args.job_id)
        print(job.to_text())
        return StatusInfo.success()
    return store.remove(args.job_id)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level.upper())
    settings = get_settings()

    with JobStore.from_settings(settings) as store:
        info = store.connect_from_settings(settings)
        if not info.ok:
            logger.error(info.message)
            return 2

        try:
            result = run(store, args)
        except ECRException as e:
            logger.error(str(e))
            return 1

    if not result.ok:
        logger.error(result.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
