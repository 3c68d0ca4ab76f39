"""Static channel and column configuration.

Declaration order matters: when a post's tags match several columns, the
first column declared here wins.
"""

from typing import Any

CHANNELS_CONFIG: dict[str, dict[str, Any]] = {
    "tech": {
        "name": "Tech",
        "description": "Engineering notes and things learned along the way",
        "icon": "/tech_cover.svg",
        "columns": {
            "go": {
                "name": "The Road to Golang",
                "description": "Articles about the Go language",
                "tags": ["Go", "golang"],
                "cover": "https://blog-assets-asong.tos-cn-beijing.volces.com/tech/go/golang_cover.png",
            },
            "general": {
                "name": "General Tech",
                "description": "General programming topics",
                "tags": ["技术", "programming", "tech"],
                "cover": "",
            },
            "product": {
                "name": "Product Design",
                "description": "Product design and user experience",
                "tags": ["产品", "product", "设计", "UX", "UI"],
                "cover": "https://images.unsplash.com/photo-1581291518857-4e27b48ff24e?q=80&w=2070&auto=format&fit=crop",
            },
        },
    },
    "life": {
        "name": "Life",
        "description": "Reflections on life and travel logs",
        "icon": "https://blog-assets-asong.tos-cn-beijing.volces.com/travel/izu/xiuqiu_cover_1-1.jpg",
        "columns": {
            "japan": {
                "name": "Travels in Japan",
                "description": "Travel logs and cultural notes from Japan",
                "tags": ["日本", "japan", "日本旅行", "日本文化"],
                "cover": "https://images.unsplash.com/photo-1493976040374-85c8e12f0c0e?q=80&w=2070&auto=format&fit=crop",
            },
            "thoughts": {
                "name": "Year in Review",
                "description": "Yearly summaries and retrospectives",
                "tags": ["年度总结", "thoughts", "总结", "回顾"],
                "cover": "https://blog-assets-asong.tos-cn-beijing.volces.com/travel/Hokkaido/hakodate_hachimanzaka_cover.jpg",
            },
            "misc": {
                "name": "Miscellany",
                "description": "Notes and passing thoughts",
                "tags": ["杂记", "随想", "记录"],
                "cover": "https://blog-assets-asong.tos-cn-beijing.volces.com/life/matsuri/kumogawa_beer_cover.jpeg",
            },
        },
    },
}
