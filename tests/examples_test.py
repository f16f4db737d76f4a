import unittest

from lambdacraft.examples import fold_array_example, fold_struct_example, map_array_example, map_struct_example
from lambdacraft.sequence import to_list


class ExamplesTestCase(unittest.TestCase):

    def test_fold_array(self):
        self.assertAlmostEqual(45.99, fold_array_example())
        self.assertAlmostEqual(3.0, fold_array_example((1.0, 2.0), nested_value=0.0))

    def test_map_array(self):
        expected = [1.6, 2.6, 3.6, 4.6, 5.6, 6.6, 7.6, 8.6, 9.6]
        result = map_array_example()

        self.assertEqual(len(expected), len(result))
        for value, mapped in zip(expected, result):
            self.assertAlmostEqual(value, mapped)

    def test_fold_struct(self):
        cases = {(): 0, ("lc",): 2, ("prog", "--flag", "x"): 11}
        for case, expected in cases.items():
            self.assertEqual(expected, fold_struct_example(case), case)

    def test_map_struct(self):
        head, new_head = map_struct_example()
        self.assertEqual([1, 4, 9], to_list(new_head))
        self.assertEqual([1, 2, 3], to_list(head))

        head, new_head = map_struct_example(())
        self.assertIsNone(head)
        self.assertIsNone(new_head)


if __name__ == '__main__':
    unittest.main()
