"""
linkmeta - 文章/视频链接元数据提取

用法:
    linkmeta "https://v.douyin.com/xxx/"
    linkmeta "7.43 复制打开抖音，看看 https://v.douyin.com/xxx/ 太好看了" --json
    linkmeta "https://mp.weixin.qq.com/s/xxx" --article
    linkmeta --batch links.txt --json
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Union

import httpx

from .catalog import build_article, build_video
from .http import NETWORK_EXCEPTIONS, new_client
from .models import Article, Video
from .platforms import PLATFORM_NAMES
from .resolver import resolve_article_metadata, resolve_metadata
from .text import clean_share_url

logger = logging.getLogger("linkmeta")

Entity = Union[Article, Video]


async def _resolve(text: str, article: bool, client: httpx.AsyncClient) -> Entity:
    url = text.strip() if article else clean_share_url(text)
    if not url:
        raise ValueError("URL必填")
    if article:
        return build_article(url, await resolve_article_metadata(url, client=client))
    return build_video(url, await resolve_metadata(url, client=client))


async def _resolve_one(text: str, article: bool) -> Entity:
    async with new_client(mobile=not article) as client:
        return await _resolve(text, article, client)


async def _resolve_many(urls: list[str], article: bool) -> list:
    async with new_client(mobile=not article) as client:
        return await asyncio.gather(
            *(_resolve(u, article, client) for u in urls),
            return_exceptions=True,
        )


def format_result(e: Entity) -> str:
    cover = e.image if isinstance(e, Article) else e.cover_image
    lines = [f"{'═'*60}"]
    lines.append(f"  来源: {PLATFORM_NAMES.get(e.source, e.source)}")
    lines.append(f"  链接: {e.url}")
    if e.publish_time:
        lines.append(f"  发布: {e.publish_time}")
    lines.append(f"{'─'*60}")
    lines.append(f"  标题: {e.title}")
    if e.author:
        lines.append(f"  作者: {e.author}")
    if e.description and e.description != e.title:
        desc = e.description[:200] + ("..." if len(e.description) > 200 else "")
        lines.append(f"  描述: {desc}")
    if cover:
        lines.append(f"  封面: {cover[:100]}")
    lines.append(f"{'═'*60}")
    return "\n".join(lines)


def _read_links(path: str) -> list[str]:
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


def batch(links_file: str, article: bool = False, as_json: bool = False) -> list[Entity]:
    urls = _read_links(links_file)
    outcomes = asyncio.run(_resolve_many(urls, article))

    results, errors = [], []
    for url, outcome in zip(urls, outcomes):
        if isinstance(outcome, (NETWORK_EXCEPTIONS + (ValueError,))):
            errors.append((url, str(outcome)))
            logger.warning(f"批量提取失败 [{url}]: {outcome}")
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append(outcome)

    if as_json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    else:
        for r in results:
            print(format_result(r))

    print(f"\n{'═'*40}", file=sys.stderr)
    print(f"  批量处理完成: 成功 {len(results)}/{len(urls)}", file=sys.stderr)
    if errors:
        print(f"  失败 {len(errors)} 个:", file=sys.stderr)
        for url, err in errors:
            print(f"    - {url[:50]}: {err[:50]}", file=sys.stderr)
    print(f"{'═'*40}", file=sys.stderr)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="linkmeta - 文章/视频链接元数据提取",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
支持平台: 抖音 | B站 | 快手 | 西瓜视频 | 微信 | 知乎 | 今日头条 | 简书 | CSDN | 掘金 | 少数派

示例:
  linkmeta "https://v.douyin.com/xxx/"
  linkmeta "https://www.bilibili.com/video/BVxxx" --json
  linkmeta "https://mp.weixin.qq.com/s/xxx" --article
""",
    )
    parser.add_argument("url", nargs="?", help="链接或分享文本")
    parser.add_argument("--article", "-a", action="store_true", help="按文章解析（默认按视频）")
    parser.add_argument("--json", "-j", action="store_true", help="JSON 格式输出")
    parser.add_argument("--batch", "-b", metavar="FILE", help="批量处理: 从文件读取链接列表")
    parser.add_argument("--verbose", "-v", action="store_true", help="详细日志")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    if args.batch:
        batch(args.batch, article=args.article, as_json=args.json)
        return

    if not args.url:
        parser.print_help()
        sys.exit(1)

    try:
        result = asyncio.run(_resolve_one(args.url, args.article))
    except (NETWORK_EXCEPTIONS + (ValueError,)) as e:
        print(f"❌ 错误: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_result(result))


if __name__ == "__main__":
    main()
