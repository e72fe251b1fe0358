# testimonialhub/services/embed.py
"""HTML snippet site owners paste into their pages to show the widget."""
import json

from ..models.project import Project, default_widget_settings

EMBED_TEMPLATE = """<!-- Testimonial Widget -->
<div id="testimonial-widget-{share_id}"></div>
<script>
  (function() {{
    var script = document.createElement('script');
    script.src = '{base_url}/widget.js';
    script.async = true;
    script.onload = function() {{
      TestimonialWidget.init({{
        shareId: '{share_id}',
        endpoint: '{base_url}/api/widget/{share_id}',
        settings: {settings}
      }});
    }};
    document.head.appendChild(script);
  }})();
</script>"""


def _script_safe_json(value) -> str:
    # keep a stray "</script>" in a stored value from closing the tag
    return json.dumps(value, sort_keys=True).replace("</", "<\\/")


def build_embed_code(project: Project, base_url: str) -> str:
    settings = project.widget_settings or default_widget_settings()
    return EMBED_TEMPLATE.format(
        share_id=project.share_id,
        base_url=base_url.rstrip("/"),
        settings=_script_safe_json(settings),
    )
