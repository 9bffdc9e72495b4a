import pytest

from element_nodes import parse_html


LOGIN_PAGE = """<!DOCTYPE html>
<html>
<head><title>Login | Acme</title></head>
<body>
  <h1 id="page-title">Sign in</h1>
  <form>
    <label for="username">Username</label>
    <input type="text" id="username" placeholder="you@example.com">
    <input type="checkbox" id="remember"><label for="remember">Remember me</label>
    <button id="login-btn" class="btn primary">Log in</button>
  </form>
  <a href="/forgot">Forgot password?</a>
</body>
</html>
"""


@pytest.fixture
def login_html():
    return LOGIN_PAGE


@pytest.fixture
def login_document():
    return parse_html(LOGIN_PAGE)
