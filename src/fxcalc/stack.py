from collections import deque


class StackOverflow(Exception):
    pass


class StackEmpty(Exception):
    pass


class BoundedStack:
    '''
    Stack holding at most capacity items.

    Pushing onto a full stack raises StackOverflow rather than dropping
    anything.
    '''

    def __init__(self, capacity):
        self.capacity = capacity
        self._items = deque()

    def push(self, item):
        if len(self._items) >= self.capacity:
            raise StackOverflow('Stack holds at most {} items'.format(
                self.capacity))
        self._items.append(item)

    def pop(self):
        if not self._items:
            raise StackEmpty('Pop from an empty stack')
        return self._items.pop()

    def peek(self):
        if not self._items:
            raise StackEmpty('Peek into an empty stack')
        return self._items[-1]

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def __iter__(self):
        '''
        Iterate bottom to top.
        '''
        return iter(self._items)

    def __repr__(self):
        return 'BoundedStack({}, {!r})'.format(self.capacity,
                                               list(self._items))
