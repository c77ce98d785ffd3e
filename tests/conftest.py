import pytest

from sw_career_pkg import config


HOME_URL = f"{config.BASE_URL}/index.jsp"


class FakeDialog:
    def __init__(self, message="Are you sure?", type="confirm"):
        self.message = message
        self.type = type
        self.dismissed = False

    async def dismiss(self):
        self.dismissed = True


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    async def click(self):
        self.page.actions.append(("click", self.selector))
        if self.selector == ".btn_login":
            self.page.url = self.page.after_login_url

    async def fill(self, value):
        self.page.actions.append(("fill", self.selector, value))


class FakeNavigation:
    def __init__(self, page):
        self.page = page

    async def __aenter__(self):
        self.page.actions.append(("expect_navigation",))
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.page.actions.append(("navigated", self.page.url))
        return False


class FakePage:
    """Stands in for playwright's Page with just the calls the controller makes."""

    def __init__(self, after_login_url=HOME_URL, globals_=None, rows=None):
        self.url = "about:blank"
        self.after_login_url = after_login_url
        self.globals = globals_ or {}
        self.rows = rows or []
        self.handlers = {}
        self.actions = []
        self.closed = False

    def on(self, event, handler):
        self.handlers[event] = handler

    def locator(self, selector):
        return FakeLocator(self, selector)

    def expect_navigation(self):
        return FakeNavigation(self)

    async def goto(self, url):
        self.actions.append(("goto", url))
        self.url = url

    async def wait_for_url(self, predicate):
        # The logout page redirects home by itself
        if self.url == config.LOGOUT_URL:
            self.url = HOME_URL
        assert predicate(self.url)
        self.actions.append(("wait_for_url", self.url))

    async def evaluate(self, script, names):
        self.actions.append(("evaluate", tuple(names)))
        return {name: self.globals[name] for name in names if name in self.globals}

    async def eval_on_selector_all(self, selector, script):
        self.actions.append(("eval_on_selector_all", selector))
        return self.rows

    async def screenshot(self, path, full_page=False):
        with open(path, "wb") as f:
            f.write(b"")

    async def content(self):
        return "<html></html>"

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.page_kwargs = None
        self.closed = False

    async def new_page(self, **kwargs):
        self.page_kwargs = kwargs
        return self.page

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fake_browser(fake_page):
    return FakeBrowser(fake_page)


@pytest.fixture
def launched_browser(monkeypatch):
    """Patch launch_browser so the controller 'launches' a FakeBrowser."""
    from sw_career_pkg import controller as controller_module

    browser = FakeBrowser(FakePage())
    launches = []

    async def fake_launch(headless=True):
        launches.append(headless)
        return browser

    monkeypatch.setattr(controller_module, "launch_browser", fake_launch)
    browser.launches = launches
    return browser
