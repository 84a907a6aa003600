#!/usr/bin/env python3
"""
Browser Screen Example
======================

Mounts HTML into a real Chrome page through Selenium and runs the same
locators and matchers against it.

Usage:
    python examples/browser_screen.py
"""

import asyncio

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions

from domscreen import DomScreenSession
from domscreen.trees import SeleniumLifecycle


def main():
    options = ChromeOptions()
    options.add_argument("--headless=new")
    driver = webdriver.Chrome(options=options)
    cleanups = []
    try:
        driver.get("data:text/html,<title>Demo</title><body></body>")
        session = DomScreenSession.init_test(SeleniumLifecycle(driver), after_each=cleanups.append)
        expect = session.expect

        screen = session.render(
            '<form><label>Name <input name="name"></label>'
            '<button type="button" role="button primary">Save</button></form>'
        )
        screen.locate("input").fill("Ada")
        expect(screen.locate("input")).to_contain_text("Ada")
        expect(screen.locate_role("primary")).to_be_in_document()
        expect(screen).to_have_title("Demo")
        screen.locate_role("button").click()
        print(f"Clicked: {screen.locate_role('button').format_description()}")

        asyncio.run(expect(screen).not_.to_have_url_path("/somewhere-else"))
        print("All assertions passed.")
    finally:
        for cleanup in cleanups:
            cleanup()
        driver.quit()


if __name__ == "__main__":
    main()
