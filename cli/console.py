"""Console UI for lingodrill."""

import time

import requests

from cli.api_client import LingoAPIClient

POLL_SECONDS = 0.25


class ConsoleUI:
    """Console user interface for the quiz and capture drills."""

    def __init__(self, client: LingoAPIClient):
        self.client = client

    def print_status(self, status: dict):
        """Print dictionary and progress summary."""
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        print(f'Learning: {status["language"]}')
        print(f'Dictionary: {status["word_count"]} words, {status["phrase_count"]} phrases')
        print(f'Lane-match high score: {status["high_score"]}')
        print(f'Mistakes recorded: {status["mistake_count"]}')
        print('=' * 50)

    def print_mistakes(self, limit: int = 10):
        mistakes = self.client.get_mistakes(limit)['mistakes']
        if not mistakes:
            print('\nNo mistakes recorded yet.')
            return
        print('\nMost missed:')
        for item in mistakes:
            print(f'  {item["english"]:<30} {item["count"]}')

    def _start(self, kind: str) -> dict | None:
        try:
            return self.client.start_round(kind)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 409:
                print(f'\n{e.response.json().get("detail", "Insufficient vocabulary")}')
                return None
            raise

    def _choose(self, prompt: str, count: int) -> int | None:
        """Read a 1-based choice. Returns None to quit."""
        while True:
            raw = input(prompt).strip().lower()
            if raw in ('q', 'quit'):
                return None
            if raw.isdigit() and 1 <= int(raw) <= count:
                return int(raw) - 1
            print(f'Enter a number from 1 to {count}, or q to quit.')

    def play_quiz(self):
        """Multiple choice until the user quits."""
        round_data = self._start('quiz')
        if round_data is None:
            return
        round_id = round_data['round_id']
        try:
            while True:
                print(f'\n[{round_data["tally"]}] Translate: "{round_data["prompt"]}"')
                for index, option in enumerate(round_data['options'], 1):
                    print(f'  {index}. {option}')
                picked = self._choose('> ', len(round_data['options']))
                if picked is None:
                    break
                result = self.client.answer(round_id, round_data['options'][picked])
                if result['correct']:
                    print('Correct!')
                    self.client.reveal_complete(round_id)
                else:
                    print(f'The correct answer is: {result["round"]["answer"]}')
                round_data = self._wait_for_question(round_id, round_data['question_number'])
        finally:
            self.client.teardown(round_id)

    def _wait_for_question(self, round_id: str, number: int) -> dict:
        """Poll until the server moves past question number."""
        while True:
            round_data = self.client.get_round(round_id)
            if round_data['question_number'] != number:
                return round_data
            time.sleep(POLL_SECONDS)

    def play_capture(self):
        """Pick the bubble that matches each English target in turn."""
        round_data = self._start('capture')
        if round_data is None:
            return
        round_id = round_data['round_id']
        last = time.monotonic()
        try:
            while round_data['state'] == 'Playing':
                now = time.monotonic()
                round_data = self.client.tick(round_id, now - last)
                last = now
                target = round_data['targets'][round_data['target_index']]
                bubbles = [b for b in round_data['bubbles'] if b['status'] == 'active']
                collected = sum(1 for t in round_data['targets'] if t['collected'])
                print(f'\n[{collected}/{len(round_data["targets"])}] Find: "{target["english"]}"')
                for index, bubble in enumerate(bubbles, 1):
                    print(f'  {index}. {bubble["text"]}')
                picked = self._choose('> ', len(bubbles))
                if picked is None:
                    return
                result = self.client.answer(round_id, bubbles[picked]['id'])
                print('Got it!' if result['correct'] else 'Not that one.')
                round_data = result['round']
            print('\nExcellent work! All words collected.')
        finally:
            self.client.teardown(round_id)

    def run(self):
        """Main menu loop."""
        self.client.health_check()
        print('Lingodrill - adaptive vocabulary practice')
        actions = [
            ('Quiz', self.play_quiz),
            ('Capture', self.play_capture),
            ('Status', lambda: self.print_status(self.client.get_status())),
            ('Most missed words', self.print_mistakes),
        ]
        while True:
            print()
            for index, (label, _) in enumerate(actions, 1):
                print(f'{index}. {label}')
            picked = self._choose('Choose (q to quit): ', len(actions))
            if picked is None:
                print('Goodbye!')
                return
            actions[picked][1]()
