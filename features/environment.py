"""
behave hooks: browser session lifecycle per scenario.

    before_all       settings + one DriverManager for the run
    before_scenario  start this worker's session and run the page init gate
    after_scenario   stop it (screenshot first if the scenario failed)
    after_all        stop anything still registered
"""

from loguru import logger

from harness_tools.common import init_logger
from harness_tools.report_tools.allure_utils import attach_failure_screenshot
from testsuites.ui_testing.framework.driver_manager import DriverManager, current_worker_id
from testsuites.ui_testing.framework.page_init import initialize_page
from testsuites.ui_testing.framework.settings import HarnessSettings


def before_all(context):
    init_logger()
    context.settings = HarnessSettings.from_config()
    context.driver_manager = DriverManager(headless=context.settings.headless)
    logger.info(
        f"BDD run: browser={context.settings.browser.value} "
        f"headless={context.settings.headless}"
    )


def before_scenario(context, scenario):
    logger.info(f"==== Scenario Setup: {scenario.name} ====")
    context.worker_id = current_worker_id()
    session = context.driver_manager.start(context.settings.browser, context.worker_id)
    session.clear_state()
    initialize_page(
        session,
        context.settings.base_url,
        context.settings.ready_selector,
        context.settings.retry_policy,
    )
    logger.info("Login page successfully loaded and ready for interaction")


def after_scenario(context, scenario):
    logger.info(f"==== Scenario Teardown: {scenario.name} ({scenario.status.name}) ====")
    if scenario.status.name == "failed" and context.driver_manager.is_started(context.worker_id):
        attach_failure_screenshot(context.driver_manager.get(context.worker_id))
    context.driver_manager.stop(context.worker_id)
    logger.info("Browser session closed")


def after_all(context):
    context.driver_manager.stop_all()
