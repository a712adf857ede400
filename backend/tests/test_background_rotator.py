"""
Unit tests for BackgroundRotator.
Run: python -m pytest backend/tests/test_background_rotator.py -v
"""

from vietcards.domain.services.background_rotator import BackgroundRotator
from vietcards.domain.value_objects.background_image import BackgroundImage


class FakeImageSource:
    def __init__(self, results):
        self.results = list(results)
        self.queries = []

    async def random_image(self, query):
        self.queries.append(query)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


IMAGE_A = BackgroundImage(url="https://images.example/a.jpg", author="An", link="https://x/a")
IMAGE_B = BackgroundImage(url="https://images.example/b.jpg")


class TestBackgroundRotator:
    async def test_refresh_sets_image(self):
        source = FakeImageSource([IMAGE_A])
        rotator = BackgroundRotator(source, interval=60)

        await rotator.refresh()

        assert rotator.current == IMAGE_A
        assert not rotator.use_fallback
        assert rotator.key == 1
        assert source.queries == ["vietnam"]

    async def test_error_switches_to_fallback(self, caplog):
        rotator = BackgroundRotator(FakeImageSource([IMAGE_A, RuntimeError("rate limited")]), interval=60)

        await rotator.refresh()
        await rotator.refresh()

        assert rotator.use_fallback
        assert rotator.current == IMAGE_A
        assert rotator.key == 2
        assert "Error fetching background image" in caplog.text

    async def test_success_after_error_clears_fallback(self):
        rotator = BackgroundRotator(FakeImageSource([RuntimeError("down"), IMAGE_B]), interval=60)

        await rotator.refresh()
        await rotator.refresh()

        assert not rotator.use_fallback
        assert rotator.current == IMAGE_B

    async def test_empty_result_keeps_state(self):
        rotator = BackgroundRotator(FakeImageSource([IMAGE_A, None]), interval=60)

        await rotator.refresh()
        await rotator.refresh()

        assert rotator.current == IMAGE_A
        assert rotator.key == 1

    async def test_start_fetches_immediately(self):
        rotator = BackgroundRotator(FakeImageSource([IMAGE_A]), interval=60, query="hanoi")

        await rotator.start()
        try:
            assert rotator.current == IMAGE_A
        finally:
            await rotator.stop()
