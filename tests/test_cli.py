import json

import httpx
import pytest

from linkmeta import cli
from linkmeta.models import Article, Video


@pytest.fixture
def video():
    return Video(
        url="https://b23.tv/abc",
        title="标题",
        description="一段简介",
        cover_image="https://img/c.jpg",
        source="bilibili",
        author="UP主",
        publish_time="2023-11-14 22:13",
    )


@pytest.mark.unit
class Describe_format_result:
    def test_should_include_fields(self, video):
        """文本输出包含来源、标题、作者与封面。"""
        out = cli.format_result(video)
        assert "来源: B站" in out
        assert "标题: 标题" in out
        assert "作者: UP主" in out
        assert "发布: 2023-11-14 22:13" in out
        assert "封面: https://img/c.jpg" in out
        assert "描述: 一段简介" in out

    def test_should_skip_empty_and_duplicate_fields(self):
        """空字段和与标题相同的描述不输出。"""
        out = cli.format_result(Article(url="https://example.org", title="同名", description="同名"))
        assert "作者" not in out
        assert "描述" not in out
        assert "来源: 其他" in out


@pytest.mark.unit
class Describe_main:
    def test_given_json_flag_should_print_json(self, video, monkeypatch, capsys):
        """--json 输出 JSON。"""
        async def fake(text, article):
            assert (text, article) == ("https://b23.tv/abc", False)
            return video
        monkeypatch.setattr(cli, "_resolve_one", fake)
        cli.main(["https://b23.tv/abc", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "标题"
        assert data["coverImage"] == "https://img/c.jpg"

    def test_given_article_flag_should_resolve_as_article(self, monkeypatch, capsys):
        """--article 按文章解析。"""
        async def fake(text, article):
            assert article is True
            return Article(url=text, title="文章", source="wechat")
        monkeypatch.setattr(cli, "_resolve_one", fake)
        cli.main(["https://mp.weixin.qq.com/s/x", "-a"])
        assert "标题: 文章" in capsys.readouterr().out

    def test_given_network_error_should_exit_with_message(self, monkeypatch, capsys):
        """网络错误时输出错误并以 1 退出。"""
        async def fake(text, article):
            raise httpx.ConnectError("refused")
        monkeypatch.setattr(cli, "_resolve_one", fake)
        with pytest.raises(SystemExit) as exc:
            cli.main(["https://b23.tv/abc"])
        assert exc.value.code == 1
        assert "❌ 错误: refused" in capsys.readouterr().err

    def test_given_no_url_should_exit(self, capsys):
        """未提供链接时打印帮助并退出。"""
        with pytest.raises(SystemExit):
            cli.main([])


@pytest.mark.unit
class Describe_batch:
    def test_should_resolve_each_link_and_report_failures(self, tmp_path, mock_client, monkeypatch, capsys):
        """批量模式逐条解析，失败的链接汇总到 stderr。"""
        ok = "https://www.bilibili.com/video/BV1ok"
        bad = "https://www.bilibili.com/video/BV1bad"
        links = tmp_path / "links.txt"
        links.write_text(f"# 注释\n{ok}\n\n{bad}\n", encoding="utf-8")
        client = mock_client({("GET", ok): {"text": "<title>好视频_哔哩哔哩_bilibili</title>"}})
        monkeypatch.setattr(cli, "new_client", lambda mobile=True: client)

        results = cli.batch(str(links), as_json=True)

        assert [r.title for r in results] == ["好视频"]
        captured = capsys.readouterr()
        assert json.loads(captured.out)[0]["source"] == "bilibili"
        assert "成功 1/2" in captured.err
