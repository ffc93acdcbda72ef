from urllib.parse import urlparse

WECHAT = "wechat"
ZHIHU = "zhihu"
TOUTIAO = "toutiao"
JIANSHU = "jianshu"
CSDN = "csdn"
JUEJIN = "juejin"
BILIBILI = "bilibili"
SSPAI = "sspai"
DOUYIN = "douyin"
KUAISHOU = "kuaishou"
XIGUA = "xigua"
OTHER = "other"

# 按顺序匹配，先命中者为准
SOURCE_TABLE: tuple[tuple[tuple[str, ...], str], ...] = (
    (("mp.weixin.qq.com", "weixin.qq.com", "video.qq.com"), WECHAT),
    (("zhihu.com",), ZHIHU),
    (("toutiao.com", "toutiao.cn"), TOUTIAO),
    (("jianshu.com",), JIANSHU),
    (("csdn.net",), CSDN),
    (("juejin.cn",), JUEJIN),
    (("bilibili.com", "b23.tv"), BILIBILI),
    (("sspai.com",), SSPAI),
    (("douyin.com", "iesdouyin.com"), DOUYIN),
    (("kuaishou.com", "gifshow.com"), KUAISHOU),
    (("ixigua.com",), XIGUA),
)

# 短链接需要先跟随跳转拿到真实地址
SHORT_LINK_HOSTS = (
    "v.douyin.com",
    "b23.tv",
    "v.kuaishou.com",
)

PLATFORM_NAMES = {
    WECHAT: "微信",
    ZHIHU: "知乎",
    TOUTIAO: "今日头条",
    JIANSHU: "简书",
    CSDN: "CSDN",
    JUEJIN: "掘金",
    BILIBILI: "B站",
    SSPAI: "少数派",
    DOUYIN: "抖音",
    KUAISHOU: "快手",
    XIGUA: "西瓜视频",
    OTHER: "其他",
}

DEFAULT_VIDEO_TITLES = {
    DOUYIN: "抖音视频",
    BILIBILI: "B站视频",
    WECHAT: "微信视频",
    KUAISHOU: "快手视频",
    XIGUA: "西瓜视频",
}


def detect_source(url: str) -> str:
    """Classify a URL by substring; unknown or malformed input gives ``other``."""
    if not isinstance(url, str) or not url.strip():
        return OTHER
    u = url.lower()
    for keys, tag in SOURCE_TABLE:
        if any(k in u for k in keys):
            return tag
    return OTHER


def is_short_link(url: str) -> bool:
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        host = (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return False
    return any(host == h or host.endswith("." + h) for h in SHORT_LINK_HOSTS)


def default_title(source: str) -> str:
    return DEFAULT_VIDEO_TITLES.get(source, "视频")
