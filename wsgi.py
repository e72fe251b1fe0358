from testimonialhub import create_app
from werkzeug.middleware.proxy_fix import ProxyFix

app = create_app()
# behind a reverse proxy: trust one hop for scheme, client ip and host
app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_for=1, x_host=1)
