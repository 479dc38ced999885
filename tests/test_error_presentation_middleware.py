"""Tests for the error presentation middleware with the default context."""
from django.test import Client, SimpleTestCase, override_settings

from error_pages.middleware.error_presentation import FALLBACK_BODY, FALLBACK_CONTENT_TYPE

from .settings import locmem_templates

LOGGER = "error_pages.middleware.error_presentation"


class DefaultErrorPagesTest(SimpleTestCase):
    """Requests through the full middleware stack, no custom configuration."""

    def test_valid_endpoint_works(self):
        resp = self.client.get("/ok/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.content, b"ok")

    def test_non_error_response_passes_through_untouched(self):
        resp = self.client.get("/created/")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.content, b"made it")
        self.assertTemplateNotUsed(resp, "serverError.html")

    def test_unknown_route_renders_404_page(self):
        resp = self.client.get("/unknown/")
        self.assertEqual(resp.status_code, 404)
        self.assertTemplateUsed(resp, "404.html")
        self.assertNotIn("reason", resp.context)
        self.assertEqual(resp.context["status"], "404")
        self.assertEqual(resp.content, b"Not found")

    def test_non_abort_404_response_renders_404_page(self):
        resp = self.client.get("/404/")
        self.assertEqual(resp.status_code, 404)
        self.assertTemplateUsed(resp, "404.html")

    def test_other_error_response_keeps_its_status(self):
        resp = self.client.get("/418/")
        self.assertEqual(resp.status_code, 418)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertEqual(resp.context["status"], "418")
        self.assertEqual(resp.context["status_message"], "I'm a Teapot")

    def test_server_error_renders_server_error_page(self):
        resp = self.client.get("/serverError/")
        self.assertEqual(resp.status_code, 500)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertEqual(resp.content, b"500 Internal Server Error")

    def test_unknown_exception_is_a_server_error(self):
        resp = self.client.get("/unknownError/")
        self.assertEqual(resp.status_code, 500)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertNotIn("reason", resp.context)

    def test_unauthorized_goes_to_server_error_page(self):
        resp = self.client.get("/unauthorized/")
        self.assertEqual(resp.status_code, 401)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertEqual(resp.context["status"], "401")
        self.assertEqual(resp.context["status_message"], "Unauthorized")

    def test_reason_is_passed_to_404_page(self):
        resp = self.client.get("/404withReason/")
        self.assertEqual(resp.status_code, 404)
        self.assertTemplateUsed(resp, "404.html")
        self.assertEqual(resp.context["reason"], "Could not find it")
        self.assertEqual(resp.content, b"Not found: Could not find it")

    def test_reason_is_passed_to_server_error_page(self):
        resp = self.client.get("/500withReason/")
        self.assertEqual(resp.status_code, 502)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertEqual(resp.context["reason"], "I messed up")

    def test_out_of_range_abort_is_a_server_error(self):
        resp = self.client.get("/600/")
        self.assertEqual(resp.status_code, 500)
        self.assertTemplateUsed(resp, "serverError.html")
        self.assertNotIn("reason", resp.context)

    def test_django_http404_message_becomes_reason(self):
        resp = self.client.get("/django404/")
        self.assertEqual(resp.status_code, 404)
        self.assertTemplateUsed(resp, "404.html")
        self.assertEqual(resp.context["reason"], "No poll matches the given query.")

    def test_django_http404_without_message_has_no_reason(self):
        resp = self.client.get("/plainDjango404/")
        self.assertEqual(resp.status_code, 404)
        self.assertNotIn("reason", resp.context)

    def test_redirect_is_not_caught(self):
        resp = self.client.get("/303/")
        self.assertEqual(resp.status_code, 303)
        self.assertEqual(resp["Location"], "ok")
        self.assertEqual(resp.templates, [])

    def test_page_is_rendered_only_once(self):
        resp = self.client.get("/404withReason/")
        self.assertEqual([t.name for t in resp.templates], ["404.html"])


class ErrorLoggingTest(SimpleTestCase):

    def test_server_error_gets_logged(self):
        with self.assertLogs(LOGGER, level="ERROR") as logs:
            self.client.get("/serverError/")
        self.assertTrue(any("Request error" in line for line in logs.output))
        self.assertIn(
            "ERROR:%s:Internal server error. Status: 500 - path: /serverError/" % LOGGER,
            logs.output,
        )

    def test_unknown_error_logged_with_traceback(self):
        with self.assertLogs(LOGGER, level="ERROR") as logs:
            self.client.get("/unknownError/")
        record = logs.records[0]
        self.assertIn("Request error", record.getMessage())
        self.assertIsNotNone(record.exc_info)

    def test_unknown_route_404_logs_no_server_error(self):
        with self.assertNoLogs(LOGGER, level="ERROR"):
            self.client.get("/unknown/")


@override_settings(TEMPLATES=locmem_templates({}))
class RendererFailureTest(SimpleTestCase):
    """Missing templates fall back to the fixed HTML snippet."""

    def assertFallback(self, resp, status):
        self.assertEqual(resp.status_code, status)
        self.assertEqual(resp.content.decode(), FALLBACK_BODY)
        self.assertEqual(resp["Content-Type"], FALLBACK_CONTENT_TYPE)

    def test_falls_back_for_server_error(self):
        self.assertFallback(self.client.get("/serverError/"), 500)

    def test_falls_back_for_404(self):
        self.assertFallback(self.client.get("/unknown/"), 404)

    def test_falls_back_for_response_status(self):
        self.assertFallback(self.client.get("/418/"), 418)

    def test_message_logged_if_renderer_fails(self):
        with self.assertLogs(LOGGER, level="WARNING") as logs:
            self.client.get("/serverError/")
        self.assertTrue(
            logs.output[-1].startswith(
                "WARNING:%s:Failed to render custom error page" % LOGGER
            )
        )

    @override_settings(TEMPLATES=locmem_templates({"serverError.html": "{% if %}"}))
    def test_falls_back_on_template_syntax_error(self):
        self.assertFallback(self.client.get("/unknownError/"), 500)


class AsyncViewTest(SimpleTestCase):

    async def test_async_view_abort_renders_404_page(self):
        resp = await self.async_client.get("/async/404/")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.content, b"Not found: Async miss")

    async def test_async_view_unknown_error_renders_server_error_page(self):
        resp = await self.async_client.get("/async/unknownError/")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.content, b"500 Internal Server Error")

    def test_async_view_through_sync_client(self):
        resp = Client().get("/async/404/")
        self.assertEqual(resp.status_code, 404)
        self.assertTemplateUsed(resp, "404.html")
