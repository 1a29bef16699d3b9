"""Tests for the dojo FastAPI server."""

import os
import tempfile
import unittest

from fastapi.testclient import TestClient

import server.app as app_module
from server.file_storage import FileStorage
from test_core import MockStorage


ONE = {'char': '一', 'meanings': ['one'], 'kunyomi': ['ひと つ'], 'onyomi': ['イチ']}
TWO = {'char': '二', 'meanings': ['two'], 'kunyomi': ['ふた つ'], 'onyomi': ['ニ']}


class ServerTestCase(unittest.TestCase):
    """Base class wiring the app to a mock storage."""

    def setUp(self):
        self.storage = MockStorage()
        app_module.storage = self.storage
        app_module.selector_settings = {}
        app_module.user_selectors.clear()
        app_module.drills.clear()
        self.client = TestClient(app_module.create_app())

    def start(self, **body) -> dict:
        response = self.client.post('/api/drills', json=body)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()


class TestHealthAndGroups(ServerTestCase):

    def test_root(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')

    def test_kana_groups(self):
        groups = self.client.get('/api/kana/groups').json()['groups']
        keys = [g['key'] for g in groups]
        self.assertIn('hiragana', keys)
        self.assertIn('katakana-yoon', keys)


class TestStartDrill(ServerTestCase):

    def test_start_with_items(self):
        data = self.start(items=[ONE, TWO])
        self.assertIn(data['key'], ['一', '二'])
        self.assertEqual(data['pool_size'], 2)
        self.assertFalse(data['reverse'])
        self.assertIn(data['drill_id'], app_module.drills)

    def test_start_with_groups(self):
        data = self.start(groups=['hiragana'], reverse=True)
        self.assertEqual(data['pool_size'], 46)
        self.assertTrue(data['reverse'])

    def test_empty_pool_rejected(self):
        response = self.client.post('/api/drills', json={})
        self.assertEqual(response.status_code, 400)

    def test_unknown_group_rejected(self):
        response = self.client.post('/api/drills', json={'groups': ['runes']})
        self.assertEqual(response.status_code, 400)
        self.assertIn('runes', response.json()['detail'])

    def test_item_without_meanings_rejected(self):
        response = self.client.post('/api/drills', json={'items': [{'char': '一', 'meanings': []}]})
        self.assertEqual(response.status_code, 422)

    def test_invalid_user_id_rejected(self):
        response = self.client.post('/api/drills', json={'user_id': 'a/b', 'items': [ONE]})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(app_module.drills, {})
        self.assertEqual(app_module.user_selectors, {})

    def test_mixed_script_reverse_drill(self):
        data = self.start(groups=['hiragana', 'katakana'], reverse=True)
        drill_id = data['drill_id']
        key = data['key']
        while key != 'ka':
            key = self.client.post(f'/api/drills/{drill_id}/skip').json()['key']

        result = self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': 'カ'}).json()

        self.assertTrue(result['correct'])
        self.assertEqual(result['expected'], ['か', 'カ'])

    def test_unknown_drill(self):
        self.assertEqual(self.client.get('/api/drills/nope').status_code, 404)
        response = self.client.post('/api/drills/nope/answer', json={'answer': 'one'})
        self.assertEqual(response.status_code, 404)


class TestAnswers(ServerTestCase):

    def test_correct_answer(self):
        drill_id = self.start(items=[ONE])['drill_id']

        response = self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': ' One '})

        self.assertEqual(response.status_code, 200)
        result = response.json()
        self.assertTrue(result['correct'])
        self.assertEqual(result['key'], '一')
        self.assertEqual(result['next_key'], '一')
        self.assertAlmostEqual(result['weight'], 0.85)
        self.assertEqual(result['stats']['score'], 1)
        # Weight table saved after every outcome
        self.assertAlmostEqual(self.storage.weights['default']['weights']['一'], 0.85)

    def test_wrong_answer(self):
        drill_id = self.start(items=[ONE], user_id='alice')['drill_id']

        result = self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': 'two'}).json()

        self.assertFalse(result['correct'])
        self.assertEqual(result['expected'], ['one', 'ひと', 'イチ'])
        self.assertAlmostEqual(result['weight'], 1.3)
        self.assertEqual(result['stats']['score'], 0)
        self.assertIn('alice', self.storage.weights)

    def test_blank_answer_rejected(self):
        drill_id = self.start(items=[ONE])['drill_id']
        response = self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': '  '})
        self.assertEqual(response.status_code, 400)

    def test_correct_answer_advances_to_other_item(self):
        data = self.start(items=[ONE, TWO])
        answer = 'one' if data['key'] == '一' else 'two'
        result = self.client.post(f"/api/drills/{data['drill_id']}/answer",
                                  json={'answer': answer}).json()
        self.assertNotEqual(result['next_key'], data['key'])

    def test_skip(self):
        data = self.start(items=[ONE, TWO])
        prompt = self.client.post(f"/api/drills/{data['drill_id']}/skip").json()
        self.assertNotEqual(prompt['key'], data['key'])
        self.assertEqual(prompt['stats']['skipped'], 1)

    def test_weak_characters(self):
        drill_id = self.start(items=[ONE])['drill_id']
        self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': 'x'})
        weak = self.client.get(f'/api/drills/{drill_id}/weak').json()
        self.assertEqual(weak['total'], 1)
        self.assertEqual(weak['characters'][0]['key'], '一')

    def test_weak_limit_must_be_positive(self):
        drill_id = self.start(items=[ONE])['drill_id']
        for limit in (0, -1):
            response = self.client.get(f'/api/drills/{drill_id}/weak', params={'limit': limit})
            self.assertEqual(response.status_code, 422)

    def test_end_drill(self):
        drill_id = self.start(items=[ONE])['drill_id']
        response = self.client.delete(f'/api/drills/{drill_id}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['drill_id'], drill_id)
        self.assertEqual(self.client.get(f'/api/drills/{drill_id}').status_code, 404)


class TestWeights(ServerTestCase):

    def test_weights_shared_between_drills(self):
        first = self.start(items=[ONE])['drill_id']
        self.client.post(f'/api/drills/{first}/answer', json={'answer': 'x'})
        self.start(items=[ONE, TWO])

        weights = self.client.get('/api/weights').json()

        self.assertAlmostEqual(weights['weights']['一'], 1.3)
        self.assertGreaterEqual(weights['total'], 1)

    def test_weights_loaded_from_storage(self):
        self.storage.weights['bob'] = {'weights': {'一': 5.0}, 'recent': ['一']}
        weights = self.client.get('/api/weights', params={'user_id': 'bob'}).json()
        self.assertEqual(weights['weights'], {'一': 5.0})
        self.assertEqual(weights['recent'], ['一'])

    def test_selector_settings_applied(self):
        app_module.selector_settings = {'wrong_factor': 2.0}
        drill_id = self.start(items=[ONE])['drill_id']
        result = self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': 'x'}).json()
        self.assertAlmostEqual(result['weight'], 2.0)

    def test_reset_weights(self):
        drill_id = self.start(items=[ONE])['drill_id']
        self.client.post(f'/api/drills/{drill_id}/answer', json={'answer': 'x'})

        response = self.client.delete('/api/weights')

        self.assertTrue(response.json()['success'])
        self.assertEqual(self.client.get('/api/weights').json()['weights'], {})
        self.assertEqual(self.storage.weights['default'], {'weights': {}, 'recent': []})

    def test_invalid_user_id_in_query(self):
        self.assertEqual(self.client.get('/api/weights', params={'user_id': 'a/b'}).status_code, 422)
        self.assertEqual(self.client.delete('/api/weights', params={'user_id': '../x'}).status_code, 422)
        self.assertEqual(self.storage.save_calls, [])


class TestSelectorSettings(unittest.TestCase):

    def test_known_keys_kept(self):
        settings = app_module.load_selector_settings(
            {'wrong_factor': 2.0, 'recency_size': 3, 'db_host': 'localhost'})
        self.assertEqual(settings, {'wrong_factor': 2.0, 'recency_size': 3})

    def test_empty_config(self):
        self.assertEqual(app_module.load_selector_settings({}), {})

    def test_invalid_settings_fail_fast(self):
        for config in ({'correct_factor': 1.5}, {'wrong_factor': 0.5},
                       {'min_weight': 5.0, 'max_weight': 1.0}, {'wrong_factor': 'high'}):
            with self.assertRaises(RuntimeError):
                app_module.load_selector_settings(config)


class TestFileStorage(unittest.TestCase):
    """Tests for FileStorage against a temporary state dir."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = FileStorage(
            config_file=os.path.join(self.tmp.name, 'config.json'),
            state_dir=self.tmp.name
        )

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_missing(self):
        self.assertIsNone(self.storage.load_weights('alice'))

    def test_save_and_load(self):
        state = {'weights': {'あ': 1.3}, 'recent': ['あ']}
        self.storage.save_weights(state, 'alice')
        self.storage.save_weights(state)
        self.assertEqual(self.storage.load_weights('alice'), state)
        self.assertEqual(self.storage.list_users(), ['alice', 'default'])

    def test_corrupt_file(self):
        with open(os.path.join(self.tmp.name, 'dojo_weights_bob.json'), 'w') as f:
            f.write('{not json')
        with self.assertLogs('server.file_storage', level='ERROR'):
            self.assertIsNone(self.storage.load_weights('bob'))

    def test_delete_user(self):
        self.storage.save_weights({'weights': {}, 'recent': []}, 'alice')
        self.assertTrue(self.storage.delete_user('alice'))
        self.assertFalse(self.storage.delete_user('alice'))

    def test_invalid_user_id(self):
        for user_id in ('a/b', '..', ''):
            with self.assertRaises(ValueError):
                self.storage.save_weights({'weights': {}, 'recent': []}, user_id)
        self.assertEqual(os.listdir(self.tmp.name), [])

    def test_missing_config(self):
        with self.assertRaises(FileNotFoundError):
            self.storage.load_config()


if __name__ == '__main__':
    unittest.main()
