"""Static API documentation page served at ``/``."""

from __future__ import annotations

from flask import render_template_string

from ytgrab.version import __version__

DOCS_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>YouTube Search &amp; Download API</title>
    <style>
        body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
        h1 { color: #ff0000; }
        code { background: #f4f4f4; padding: 2px 5px; border-radius: 3px; }
        pre { background: #f4f4f4; padding: 15px; border-radius: 5px; overflow-x: auto; }
        .endpoint { margin-bottom: 20px; }
    </style>
</head>
<body>
    <h1>YouTube Search &amp; Download API</h1>
    <p>ytgrab {{ version }}</p>

    <h2>API Endpoints:</h2>
    {% for endpoint in endpoints %}
    <div class="endpoint">
        <h3>{{ endpoint.title }}</h3>
        {% for usage in endpoint.usages %}<code>GET {{ usage }}</code><br>{% endfor %}
        <p>{{ endpoint.summary }}</p>
    </div>
    {% endfor %}

    <h2>Example Response:</h2>
    <pre>{
  "query": "example search",
  "results": [
    {
      "title": "Example Video",
      "videoId": "VIDEO_ID",
      "channelName": "Example Channel",
      "thumbnailUrl": "https://i.ytimg.com/vi/VIDEO_ID/hqdefault.jpg",
      "viewCountText": "1M views",
      "publishedText": "2 years ago",
      "description": "This is an example video description",
      "durationText": "4:13",
      "videoUrl": "https://www.youtube.com/watch?v=VIDEO_ID",
      "downloadMp4": "{{ base_url }}/api/download?videoId=VIDEO_ID&amp;format=mp4",
      "directMp4": "{{ base_url }}/api/direct-download?videoId=VIDEO_ID&amp;format=mp4"
    }
  ]
}</pre>
</body>
</html>
"""

ENDPOINTS: tuple[dict[str, object], ...] = (
    {
        "title": "Search for videos",
        "usages": ("/api/search?q=your+search+query",),
        "summary": "Search for YouTube videos based on a query.",
    },
    {
        "title": "Video details",
        "usages": ("/api/video/VIDEO_ID",),
        "summary": "Title, channel, description and counters for one video.",
    },
    {
        "title": "Download via URL redirection",
        "usages": (
            "/api/download?videoId=VIDEO_ID&format=mp4",
            "/api/download?videoId=VIDEO_ID&format=mp3",
        ),
        "summary": "Redirects to the best matching media URL on YouTube's servers.",
    },
    {
        "title": "Direct download (streaming)",
        "usages": (
            "/api/direct-download?videoId=VIDEO_ID&format=mp4",
            "/api/direct-download?videoId=VIDEO_ID&format=mp3",
        ),
        "summary": "Streams the file through this server with a proper filename.",
    },
)


def render_docs(base_url: str) -> str:
    return render_template_string(
        DOCS_TEMPLATE,
        version=__version__,
        endpoints=ENDPOINTS,
        base_url=base_url,
    )
