"""Console UI for dojo drills."""

import requests

from cli.api_client import DojoAPIClient


class ConsoleUI:
    """Console user interface for dojo drills."""

    def __init__(self, client: DojoAPIClient):
        self.client = client

    def print_result(self, result: dict):
        """Print the outcome of an answer."""
        if result['correct']:
            print(f"  ✓ {result['key']} = {result['answer']}")
        else:
            print(f"  ✗ {result['key']} ≠ {result['answer']}")
        print(f"  Score: {result['stats']['score']} | weight {result['weight']:.2f}")

    def print_stats(self, stats: dict):
        """Print drill stats."""
        print('\n' + '=' * 40)
        print('DRILL STATS')
        print('=' * 40)
        print(f"Score: {stats['score']}")
        print(f"Correct: {stats['correct_answers']} | Wrong: {stats['wrong_answers']} | Skipped: {stats['skipped']}")
        print(f"Accuracy: {stats['accuracy'] * 100:.0f}%")
        print(f"Best streak: {stats['best_streak']}")
        print('=' * 40 + '\n')

    def print_weak(self, weak: dict):
        """Print the characters with the highest weights."""
        if not weak['characters']:
            print('No weak characters yet.')
            return
        print('\n--- NEEDS PRACTICE ---')
        for entry in weak['characters']:
            print(f"  {entry['key']}  weight {entry['weight']:.2f}  "
                  f"({entry['correct']} correct, {entry['wrong']} wrong)")
        print('----------------------')

    def print_weights(self, table: dict, limit: int = 10):
        """Print the heaviest entries of the learner's weight table."""
        if not table['weights']:
            print('No weights learned yet.')
            return
        heaviest = sorted(table['weights'].items(), key=lambda kv: kv[1], reverse=True)
        print(f"\n--- WEIGHTS ({table['total']} characters) ---")
        for key, weight in heaviest[:limit]:
            print(f"  {key}  {weight:.2f}")
        print('----------------------')

    def run(self, groups: list[str], reverse: bool = False):
        """Run the drill loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to dojo server ({health['status']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        try:
            prompt = self.client.start_drill(groups=groups, reverse=reverse)
        except requests.HTTPError as e:
            print(f"Error starting drill: {e}")
            return

        drill_id = prompt['drill_id']
        mode = 'romaji -> kana' if reverse else 'kana -> romaji'
        print(f"\nDrilling {', '.join(groups)} ({prompt['pool_size']} characters, {mode})")
        print('Commands: ":skip", ":stats", ":weak", ":weights", ":reset", ":quit"\n')

        key = prompt['key']
        while True:
            user_input = input(f'{key} ==> ').strip()

            if user_input == ':quit':
                final = self.client.end_drill(drill_id)
                self.print_stats(final['stats'])
                print('Goodbye!')
                return

            elif user_input == ':skip':
                prompt = self.client.skip(drill_id)
                print(f'  skipped ~ {key}')
                key = prompt['key']

            elif user_input == ':stats':
                prompt = self.client.get_drill(drill_id)
                self.print_stats(prompt['stats'])

            elif user_input == ':weak':
                self.print_weak(self.client.get_weak_characters(drill_id))

            elif user_input == ':weights':
                self.print_weights(self.client.get_weights())

            elif user_input == ':reset':
                self.client.reset_weights()
                print('  weights reset')

            elif user_input == '':
                continue

            else:
                try:
                    result = self.client.submit_answer(drill_id, user_input)
                except requests.HTTPError as e:
                    print(f"Error submitting answer: {e}")
                    continue
                self.print_result(result)
                key = result['next_key']
