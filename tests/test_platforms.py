import pytest

from linkmeta.platforms import default_title, detect_source, is_short_link


@pytest.mark.unit
class Describe_detect_source:
    @pytest.mark.parametrize("url,expected", [
        ("https://mp.weixin.qq.com/s/AbCdEf", "wechat"),
        ("https://channels.weixin.qq.com/web/pages/feed", "wechat"),
        ("https://zhuanlan.zhihu.com/p/123", "zhihu"),
        ("https://www.toutiao.com/article/1/", "toutiao"),
        ("https://m.toutiao.cn/i1/", "toutiao"),
        ("https://www.jianshu.com/p/abc", "jianshu"),
        ("https://blog.csdn.net/u/article/details/1", "csdn"),
        ("https://juejin.cn/post/1", "juejin"),
        ("https://www.bilibili.com/video/BV1xx411c7mD", "bilibili"),
        ("https://b23.tv/abc", "bilibili"),
        ("https://sspai.com/post/1", "sspai"),
        ("https://v.douyin.com/abc/", "douyin"),
        ("https://www.iesdouyin.com/share/video/1/", "douyin"),
        ("https://v.kuaishou.com/abc", "kuaishou"),
        ("https://www.ixigua.com/123", "xigua"),
    ])
    def test_given_known_domain_should_return_platform(self, url, expected):
        """已知域名应识别为对应平台。"""
        assert detect_source(url) == expected

    def test_should_ignore_scheme_path_and_query(self):
        """识别结果与协议、路径、查询参数无关。"""
        for url in ("http://bilibili.com", "https://www.bilibili.com/x?y=1#z", "bilibili.com/video/BV1"):
            assert detect_source(url) == "bilibili"

    def test_should_be_case_insensitive(self):
        """域名大小写不影响识别。"""
        assert detect_source("HTTPS://WWW.BILIBILI.COM/VIDEO/BV1") == "bilibili"

    def test_given_unknown_domain_should_return_other(self):
        """未知域名返回 other。"""
        assert detect_source("https://example.org/page") == "other"

    @pytest.mark.parametrize("url", ["", "   ", None, 42, "not a url"])
    def test_given_bad_input_should_return_other(self, url):
        """空值或非法输入不抛异常，返回 other。"""
        assert detect_source(url) == "other"

    def test_should_apply_table_in_order(self):
        """多个平台关键字同时出现时取表中靠前者。"""
        assert detect_source("https://mp.weixin.qq.com/s?src=bilibili.com") == "wechat"


@pytest.mark.unit
class Describe_is_short_link:
    @pytest.mark.parametrize("url", ["https://v.douyin.com/abc/", "https://b23.tv/xyz", "http://v.kuaishou.com/k"])
    def test_given_short_link_should_return_true(self, url):
        """短链接域名应被识别。"""
        assert is_short_link(url)

    @pytest.mark.parametrize("url", ["https://www.douyin.com/video/1", "https://www.bilibili.com/video/BV1", "", None])
    def test_given_canonical_url_should_return_false(self, url):
        """完整链接不需要跳转解析。"""
        assert not is_short_link(url)


@pytest.mark.unit
class Describe_default_title:
    def test_given_known_platform_should_return_platform_title(self):
        """已知平台有专属默认标题。"""
        assert default_title("douyin") == "抖音视频"
        assert default_title("bilibili") == "B站视频"

    def test_given_unknown_platform_should_return_generic_title(self):
        """未知平台返回通用标题。"""
        assert default_title("other") == "视频"
